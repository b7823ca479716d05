"""Procedural sheet-metal storage box generator."""

import logging

import manifold3d

# Smooth handle tubes, hubs and castor tires
manifold3d.set_circular_segments(24)

logger = logging.getLogger(__name__)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
