from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from src.utility.constants_manager import ConstantsManager

from .core.capacity import estimate
from .core.errors import CapacityError
from .core.service import ImageCodecService
from .models.codec_models import CodecEvent
from .utils.image_utils import ensure_lossless_path, load_image_from_input, save_stego_image

logger = logging.getLogger(__name__)

PROGRESS_MESSAGES = {
    CodecEvent.ENCODING_STARTED: "Encoding image",
    CodecEvent.HEADER_ENCODED: "Encoded Header",
    CodecEvent.DATA_ENCODED: "Encoded Data",
    CodecEvent.DECODING_STARTED: "Decoding image",
    CodecEvent.HEADER_DECODED: "Decoded Header",
    CodecEvent.DATA_DECODED: "Decoded Data",
}


def print_progress(event: CodecEvent) -> None:
    print(PROGRESS_MESSAGES[event])


def encode(args, service: ImageCodecService) -> None:
    output = ensure_lossless_path(args.output)
    image = load_image_from_input(file=args.image)
    data = Path(args.file).read_bytes()

    width, height = image.size
    report = estimate(width, height, len(data), service.options)
    if not report.fits:
        raise CapacityError(len(data), report.capacity_bytes, "Image is too small to fit the data")

    print(f"Space used in image: {report.utilization_percent:.1f}% Data Size: {len(data) / (1024 * 1024):.1f}MB")

    stego_image, _ = service.hide_file(image, args.file, data, on_progress=print_progress)
    save_stego_image(stego_image, output)
    logger.info(f"Saved encoded image to {output}")


def decode(args, service: ImageCodecService) -> None:
    image = load_image_from_input(file=args.image)
    if args.output:
        output = Path(args.output)
        result = service.reveal_file(image, output.parent, output_name=output.name, on_progress=print_progress)
    else:
        result = service.reveal_file(image, Path.cwd(), on_progress=print_progress)
    print(f"Recovered {result.embedded_name!r} to {result.output_path} ({result.size_bytes} bytes)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='img-fu', description='Hide a file inside an image, and get it back')
    p.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    sub = p.add_subparsers(dest='cmd', required=True)

    p_encode = sub.add_parser('encode', help='Encodes Data')
    p_encode.add_argument('-i', '--image', required=True, help='Image to hide data within')
    p_encode.add_argument('-f', '--file', required=True, help='Data to hide')
    p_encode.add_argument('-o', '--output', required=True, help='Output file (PNG, BMP or TIFF)')

    p_decode = sub.add_parser('decode', help='Decodes Data')
    p_decode.add_argument('-i', '--image', required=True, help='Image with hidden data')
    p_decode.add_argument('-o', '--output', help='Output file, or use original file name')

    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    constants = ConstantsManager()
    logging.basicConfig(level=logging.DEBUG if args.verbose else constants.get_log_level())

    try:
        service = ImageCodecService(constants.get_codec_options())
        if args.cmd == 'encode':
            encode(args, service)
        elif args.cmd == 'decode':
            decode(args, service)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
