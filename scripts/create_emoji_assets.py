"""
Write the default emoji sticker PNGs, one per expression category.
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from emojify.assets import save_emoji_assets


def main():
    parser = argparse.ArgumentParser(description='Render the default emoji stickers')
    parser.add_argument(
        '--output-dir',
        type=str,
        default=None,
        help='Where to write the PNGs (default: assets/emoji)'
    )
    parser.add_argument(
        '--size',
        type=int,
        default=256,
        help='Sticker side length in pixels'
    )

    args = parser.parse_args()

    project_root = Path(__file__).parent.parent
    output_dir = Path(args.output_dir) if args.output_dir else project_root / 'assets' / 'emoji'

    print(f"Rendering {args.size}x{args.size} emoji stickers...")
    print("=" * 60)

    written = save_emoji_assets(output_dir, size=args.size)
    for emoji, path in written.items():
        print(f"{emoji.name:22s} -> {path.name}")

    print("=" * 60)
    print(f"✅ Wrote {len(written)} stickers to {output_dir}")


if __name__ == '__main__':
    main()
