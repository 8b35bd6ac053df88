"""Command line entry point: render a JSON chat script to PNG frames."""

import argparse
import logging
import os
import sys
import tempfile

from .errors import ChatFramesError, InvalidInput
from .messages import load_script
from .sequencer import generate_frames
from .sink import UploadingFrameSink, configure_cloudinary, prune_old_frames
from .style import Style

DEFAULT_OUTPUT_DIR = os.environ.get("TMP_DIR") or tempfile.gettempdir()


def parse_args(argv=None):
    p = argparse.ArgumentParser(description='Render chat bubble frames from a JSON script')
    p.add_argument('--script', '-s', required=True, help='Path to JSON script file')
    p.add_argument('--output-dir', '-o', default=DEFAULT_OUTPUT_DIR,
                   help=f'Directory for the PNG frames (default: {DEFAULT_OUTPUT_DIR})')
    p.add_argument('--me', help='Your sender name (right-hand bubbles)')
    p.add_argument('--title', help='Title drawn at the top of every frame')
    p.add_argument('--width', type=int, help='Canvas width')
    p.add_argument('--height', type=int, help='Canvas height')
    p.add_argument('--font-size', type=int, help='Font size in pixels')
    p.add_argument('--font', dest='font_path', help='TrueType font file')
    p.add_argument('--background', dest='background_path', help='Background template image')
    p.add_argument('--workers', type=int, help='Render frames on this many threads')
    p.add_argument('--prune-older-than', type=float, metavar='SECONDS',
                   help='Delete files in the output directory older than this first')
    p.add_argument('--upload', action='store_true',
                   help='Upload frames to Cloudinary (configured from CLOUDINARY_* env vars)')
    p.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        print(f"Loading script from: {args.script}")
        messages, script_title, style_options = load_script(args.script, me=args.me)
        style = Style.from_options(
            style_options,
            title=args.title or script_title,
            width=args.width,
            height=args.height,
            font_size=args.font_size,
            font_path=args.font_path,
            background_path=args.background_path,
            workers=args.workers,
        )
        print(f"Loaded {len(messages)} messages")

        if args.prune_older_than is not None and os.path.isdir(args.output_dir):
            pruned = prune_old_frames(args.output_dir, args.prune_older_than)
            print(f"Pruned {len(pruned)} old files")

        print(f"Rendering frames at {style.width}x{style.height}...")
        frames = generate_frames(messages, style)
        upload = args.upload and configure_cloudinary()
        if args.upload and not upload:
            print("Cloudinary is not configured, keeping frames local")
        stored = UploadingFrameSink(args.output_dir, upload=upload).store_all(frames)
    except InvalidInput as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2
    except (ChatFramesError, OSError) as e:
        print(f"Frame generation failed: {e}", file=sys.stderr)
        return 1

    for item in stored:
        print(item.url or item.local)
    print(f"✅ {len(stored)} frames written to {args.output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
