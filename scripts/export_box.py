#!/usr/bin/env python3
"""
Generate a box and export it as STL parts, a combined STL and a GLB preview.

Usage:
    python scripts/export_box.py --length 300 --width 200 --height 150
    python scripts/export_box.py --no-enable-straight-top --enable-ribs --output out/
    python scripts/export_box.py --enable-handles --enable-wheels --material aluminium
"""
import argparse
import sys
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    from box_generator.config import BoxParams

    parser = argparse.ArgumentParser(description="Generate a sheet-metal storage box")
    for name, field in BoxParams.model_fields.items():
        flag = f"--{name.replace('_', '-')}"
        if field.annotation is bool:
            parser.add_argument(flag, action=argparse.BooleanOptionalAction, default=field.default)
        elif field.annotation is float:
            parser.add_argument(flag, type=float, default=field.default)
        else:
            parser.add_argument(flag, default=field.default)
    parser.add_argument("--output", default="exports", help="Output directory")
    parser.add_argument("--validate", action="store_true", help="Print the validation checklist")
    return parser


def generate_and_export(params, output_dir: str, validate: bool = False) -> list[str]:
    """Full pipeline: build the box, then write STL parts, combined STL and GLB."""
    from box_generator.assembly.box import BoxBuilder
    from box_generator.export.glb import export_glb_bytes
    from box_generator.export.stl import export_parts_to_directory, export_stl_bytes
    from box_generator.settings import Settings
    from box_generator.validation.checks import validate_scene

    settings = Settings()
    print(f"Generating {params.length:g}x{params.width:g}x{params.height:g} box...")
    result = BoxBuilder(settings).build(params)

    print(f"  Variants: {result.variants}")
    print(f"  Solids: {len(result.parts)}")
    print(f"  Triangles: {result.triangle_count}")
    for warning in result.warnings:
        print(f"  Warning: {warning}")

    out = Path(output_dir)
    files = export_parts_to_directory(result, out / "parts")
    (out / "box.stl").write_bytes(export_stl_bytes(result.parts))
    (out / "box.glb").write_bytes(export_glb_bytes(result.parts))
    files = [f"parts/{f}" for f in files] + ["box.stl", "box.glb"]

    if validate:
        report = validate_scene(result.assembly, result.parts, settings.max_triangles)
        print(f"  Validation: {'PASS' if report['pass'] else 'FAIL'}")
        for key in ("base_count", "panel_count", "edge_count", "triangle_count", "all_watertight"):
            print(f"    {key}: {report[key]}")
    return files


def main():
    from box_generator.config import BoxParams
    from box_generator.errors import BoxGeneratorError

    args = build_parser().parse_args()
    values = {name: getattr(args, name) for name in BoxParams.model_fields}
    try:
        params = BoxParams(**values)
        files = generate_and_export(params, args.output, validate=args.validate)
    except BoxGeneratorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"\nWrote {len(files)} files to {args.output}/")


if __name__ == "__main__":
    main()
