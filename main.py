import argparse
import logging
import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

from bencode_value import BencodeError, ByteStr, Dict, Int, List, load

# Text longer than this is summarised as a byte count
MAX_TEXT_LEN = 80


def _show_bytes(raw: bytes) -> str:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return f"<{len(raw)} bytes>"
    if len(text) > MAX_TEXT_LEN or not text.isprintable():
        return f"<{len(raw)} bytes>"
    return repr(text)


def render(value, indent: int = 0) -> list:
    """Renders a Value as indented lines of text."""
    pad = "  " * indent

    if isinstance(value, ByteStr):
        return [pad + _show_bytes(value.value)]

    if isinstance(value, Int):
        return [pad + str(value.value.value)]

    if isinstance(value, List):
        lines = [pad + "["]
        for item in value:
            lines.extend(render(item, indent + 1))
        lines.append(pad + "]")
        return lines

    if isinstance(value, Dict):
        lines = [pad + "{"]
        for key, item in value.items():
            lines.append(f"{pad}  {key.decode('utf-8', 'backslashreplace')}:")
            lines.extend(render(item, indent + 2))
        lines.append(pad + "}")
        return lines

    raise TypeError(f"Cannot render object of type {type(value)}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Decode a Bencoded file and print its contents.")
    parser.add_argument("path", help="file to decode, e.g. a .torrent")
    parser.add_argument("--raw", action="store_true", help="print the Value repr instead of a tree")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        value = load(args.path)
    except BencodeError as exc:
        print(f"[Error] {args.path}: {exc}", file=sys.stderr)
        return 1

    if args.raw:
        print(repr(value))
    else:
        print("\n".join(render(value)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
