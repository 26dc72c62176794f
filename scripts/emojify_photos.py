"""
Batch script: cover every face in a set of photos with a matching emoji.
"""

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path

import pandas as pd
from tqdm import tqdm

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from emojify.assets import default_emoji_assets, load_emoji_assets
from emojify.emojifier import Emojifier
from emojify.face_detector import FaceDetector
from emojify.image_processor import ImageProcessor
from emojify.visualization import plot_emojify_comparison, plot_emoji_distribution


IMAGE_EXTENSIONS = ['*.png', '*.jpg', '*.jpeg']


def collect_images(inputs):
    """Expand files and directories into a sorted list of image paths."""
    image_paths = []
    for item in inputs:
        path = Path(item)
        if path.is_dir():
            for ext in IMAGE_EXTENSIONS:
                image_paths.extend(path.glob(ext))
        elif path.exists():
            image_paths.append(path)
        else:
            print(f"⚠️  Skipping {path}: not found")
    return sorted(set(image_paths))


def main():
    parser = argparse.ArgumentParser(description='Cover faces in photos with matching emoji')
    parser.add_argument(
        'inputs',
        nargs='+',
        help='Image files or directories of images'
    )
    parser.add_argument(
        '--output-dir',
        type=str,
        default=None,
        help='Directory for emojified images (default: results/emojified)'
    )
    parser.add_argument(
        '--assets-dir',
        type=str,
        default=None,
        help='Directory with emoji PNGs (default: built-in rendered stickers)'
    )
    parser.add_argument(
        '--min-face-size',
        type=int,
        default=48,
        help='Smallest face side length in pixels'
    )
    parser.add_argument(
        '--comparison',
        action='store_true',
        help='Also save side-by-side comparison plots'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log per-face probabilities and placement'
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    project_root = Path(__file__).parent.parent
    output_dir = Path(args.output_dir) if args.output_dir else project_root / 'results' / 'emojified'
    output_dir.mkdir(parents=True, exist_ok=True)

    image_paths = collect_images(args.inputs)
    if not image_paths:
        print("❌ No images found!")
        return 1

    if args.assets_dir:
        assets = load_emoji_assets(args.assets_dir)
        print(f"Loaded {len(assets)} emoji images from {args.assets_dir}")
    else:
        assets = default_emoji_assets()

    detector = FaceDetector(min_face_size=(args.min_face_size, args.min_face_size))
    if not detector.available:
        print("❌ Face detection not available (Haar cascade missing)")
        return 1

    emojifier = Emojifier(detector, assets)
    image_processor = ImageProcessor()

    print(f"\nEmojifying {len(image_paths)} image(s)...")
    print("=" * 60)

    rows = []
    totals = Counter()
    failures = 0

    for image_path in tqdm(image_paths, desc='Emojifying'):
        try:
            original = image_processor.load(image_path)
            result = emojifier.emojify(original)

            out_path = output_dir / f'{image_path.stem}_emojified.png'
            image_processor.save(result.image, out_path)

            if args.comparison:
                labels = [f.emoji.label for f in result.faces]
                plot_emojify_comparison(
                    original,
                    result.image,
                    output_dir / 'comparisons' / f'{image_path.stem}_comparison.png',
                    title=image_path.name,
                    labels=labels,
                )

            for notice in result.notices:
                tqdm.write(f"⚠️  {image_path.name}: {notice}")

            totals.update(result.emoji_counts)
            rows.append({
                'image': image_path.name,
                'faces': len(result.faces),
                'applied': sum(1 for f in result.faces if f.applied),
                'emoji': ' '.join(f.emoji.name for f in result.faces),
                'output': str(out_path),
            })
        except Exception as e:
            failures += 1
            tqdm.write(f"❌ Error processing {image_path}: {e}")

    print("=" * 60)

    if rows:
        df = pd.DataFrame(rows)
        print("\n" + df[['image', 'faces', 'applied', 'emoji']].to_string(index=False))

        csv_path = output_dir / 'summary.csv'
        df.to_csv(csv_path, index=False)
        print(f"\n✅ Summary saved to {csv_path}")

    if len(rows) > 1:
        plot_path = output_dir / 'emoji_distribution.png'
        plot_emoji_distribution(totals, plot_path)
        print(f"✅ Emoji distribution plot saved to {plot_path}")

    print(f"\n✅ Emojified {len(rows)} image(s), {sum(totals.values())} face(s) -> {output_dir}")
    if failures:
        print(f"❌ {failures} image(s) failed")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
