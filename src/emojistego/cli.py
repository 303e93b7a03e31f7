"""Command-line interface for emojistego."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import TextIO, Union

from .clipboard import Clipboard, ClipboardTranscoder, SystemClipboard
from .codec import VariationSelectorCodec, ZWJCodec, make_codec
from .config import Settings, get_scheme_info, list_schemes, load_settings
from .utils import DecodedMessage, InvalidArgumentError, StegoError

PROG = "emojistego"
PROMPT = "emojistego> "

AnyCodec = Union[VariationSelectorCodec, ZWJCodec]


# ---------------------------------------------------------------------------
# carrier:message parsing
# ---------------------------------------------------------------------------


def parse_pair(value: str) -> tuple[str, str]:
    """Split ``"carrier:message"`` on its first colon.

    Raises:
        InvalidArgumentError: If there is no colon or the carrier is empty.
    """
    carrier, sep, message = value.partition(":")
    if not sep:
        raise InvalidArgumentError(f'Expected "carrier:message", got {value!r}')
    if not carrier:
        raise InvalidArgumentError(f"Missing carrier in {value!r}")
    return carrier, message


def parse_pairs(value: str) -> dict[str, str]:
    """Parse ``"c1:m1,c2:m2,..."`` into an ordered ``{carrier: message}`` dict.

    A carrier that appears twice keeps its last message.
    """
    messages: dict[str, str] = {}
    for part in value.split(","):
        carrier, message = parse_pair(part)
        messages[carrier] = message
    return messages


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_input_options(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("text", nargs="?", default=None, help="text to inspect")
    sub.add_argument("-f", "--file", default=None, help="read text from a file")
    sub.add_argument("--paste", action="store_true", help="read text from the clipboard")


def _build_parser() -> argparse.ArgumentParser:
    schemes = [info.name for info in list_schemes()]
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Hide text inside emoji and other characters using invisible code points.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="print diagnostics to stderr"
    )
    parser.add_argument(
        "--scheme", choices=schemes, default=None, help="encoding scheme (default: vs)"
    )
    parser.add_argument(
        "--compress",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="compress payloads when it makes them smaller (vs scheme only)",
    )

    sub = parser.add_subparsers(dest="command")

    # -- encode --------------------------------------------------------
    enc = sub.add_parser("encode", help="hide a message behind a carrier character")
    enc.add_argument("carrier", help="visible carrier character, e.g. 😊")
    enc.add_argument("message", nargs="+", help="message to hide")
    enc.add_argument("--copy", action="store_true", help="also write the result to the clipboard")

    # -- encode-multiple -----------------------------------------------
    multi = sub.add_parser("encode-multiple", help="hide several carrier:message pairs")
    multi.add_argument("pairs", help='pairs as "c1:msg1,c2:msg2"')
    multi.add_argument("--copy", action="store_true", help="also write the result to the clipboard")

    # -- decode --------------------------------------------------------
    dec = sub.add_parser("decode", help="recover hidden messages")
    _add_input_options(dec)
    dec.add_argument("--all", action="store_true", help="decode every message (vs scheme)")

    # -- inspection ----------------------------------------------------
    _add_input_options(sub.add_parser("check", help="report whether text holds hidden data"))
    _add_input_options(sub.add_parser("stats", help="show hidden data statistics"))
    _add_input_options(sub.add_parser("visible", help="show only the visible characters"))

    # -- clipboard -----------------------------------------------------
    sub.add_parser("raw", help="print the raw clipboard content")
    setp = sub.add_parser("set", help="put plain text on the clipboard")
    setp.add_argument("text", nargs="+", help="text to copy")

    sub.add_parser("interactive", help="start an interactive session")
    sub.add_parser("schemes", help="list the available encoding schemes")

    return parser


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _log(msg: str) -> None:
    print(msg, file=sys.stderr)


def _emit(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.write("\n")


def _format_messages(messages: list[DecodedMessage]) -> list[str]:
    return [f'  {i}. {m.base_character}: "{m.message}"' for i, m in enumerate(messages, 1)]


def _read_input(args: argparse.Namespace, clipboard: Clipboard) -> str:
    """Return the text to work on: argument, file, clipboard, then piped stdin."""
    if args.text is not None:
        return args.text
    if args.file is not None:
        with open(args.file, encoding="utf-8") as fh:
            return fh.read()
    if args.paste:
        return ClipboardTranscoder(clipboard).get_raw_text()
    if not sys.stdin.isatty():
        return sys.stdin.read()
    raise InvalidArgumentError(
        f"{args.command}: no input (pass a string, -f FILE, --paste, or pipe stdin)"
    )


def _resolve_codec(args: argparse.Namespace, settings: Settings) -> AnyCodec:
    scheme = args.scheme or settings.scheme
    if args.compress is not None:
        compress = args.compress
    else:
        info = get_scheme_info(scheme)
        compress = settings.compress and info is not None and info.supports_compression
    return make_codec(scheme, compress=compress, carrier=settings.carrier)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_encode(codec: AnyCodec, args: argparse.Namespace, clipboard: Clipboard, verbose: bool) -> None:
    message = " ".join(args.message)

    t0 = time.perf_counter()
    encoded = codec.encode(args.carrier, message)
    elapsed = time.perf_counter() - t0

    if verbose:
        _log(f"Scheme:         {codec.name}")
        _log(f"Payload size:   {len(message.encode('utf-8'))} bytes")
        _log(f"Encoded length: {len(encoded)} code points")
        _log(f"Encoding time:  {elapsed * 1000:.2f}ms")

    if args.copy:
        ClipboardTranscoder(clipboard).set_raw_text(encoded)
        if verbose:
            _log("Encoded text written to clipboard")
    _emit(encoded)


def _cmd_encode_multiple(
    codec: AnyCodec, args: argparse.Namespace, clipboard: Clipboard, verbose: bool
) -> None:
    if not isinstance(codec, VariationSelectorCodec):
        raise InvalidArgumentError("encode-multiple requires the vs scheme")
    messages = parse_pairs(args.pairs)
    encoded = codec.encode_multiple(messages)

    if verbose:
        _log(f"Encoded {len(messages)} messages into {len(encoded)} code points")

    if args.copy:
        ClipboardTranscoder(clipboard).set_raw_text(encoded)
    _emit(encoded)


def _cmd_decode(codec: AnyCodec, args: argparse.Namespace, clipboard: Clipboard, verbose: bool) -> None:
    text = _read_input(args, clipboard)

    t0 = time.perf_counter()
    if args.all:
        if not isinstance(codec, VariationSelectorCodec):
            raise InvalidArgumentError("decode --all requires the vs scheme")
        messages = codec.decode_all(text)
        elapsed = time.perf_counter() - t0
        if not messages:
            print("No hidden messages found.")
        else:
            print(f"Found {len(messages)} hidden message(s):")
            for line in _format_messages(messages):
                print(line)
    else:
        decoded = codec.decode(text)
        elapsed = time.perf_counter() - t0
        if not decoded:
            print("No hidden message found.")
        else:
            _emit(decoded)

    if verbose:
        _log(f"Decoding time: {elapsed * 1000:.2f}ms")


def _cmd_check(args: argparse.Namespace, clipboard: Clipboard) -> None:
    text = _read_input(args, clipboard)
    has_vs = VariationSelectorCodec().has_hidden_data(text)
    has_zwj = ZWJCodec().has_hidden_data(text)
    print(f"Hidden data (variation selectors): {'yes' if has_vs else 'no'}")
    print(f"Hidden data (zwj):                 {'yes' if has_zwj else 'no'}")


def _cmd_stats(codec: AnyCodec, args: argparse.Namespace, clipboard: Clipboard) -> None:
    text = _read_input(args, clipboard)
    stats = VariationSelectorCodec().stats(text)
    print(f"Total length:   {stats.total_length} characters")
    print(f"Visible length: {stats.visible_length} characters")
    print(f"Hidden bytes:   {stats.hidden_bytes}")
    print(f"Message count:  {stats.message_count}")
    if isinstance(codec, ZWJCodec):
        print(f"ZWJ data:       {'yes' if codec.has_hidden_data(text) else 'no'}")


def _cmd_visible(codec: AnyCodec, args: argparse.Namespace, clipboard: Clipboard) -> None:
    _emit(codec.get_visible_text(_read_input(args, clipboard)))


def _cmd_raw(clipboard: Clipboard) -> None:
    raw = ClipboardTranscoder(clipboard).get_raw_text()
    if not raw:
        print("Clipboard is empty")
    else:
        _emit(raw)


def _cmd_set(args: argparse.Namespace, clipboard: Clipboard) -> None:
    text = " ".join(args.text)
    ClipboardTranscoder(clipboard).set_raw_text(text)
    print(f'Set clipboard to: "{text}"')


def _cmd_schemes() -> None:
    for info in list_schemes():
        print(f"{info.name:<5} {info.description}")


# ---------------------------------------------------------------------------
# Interactive mode
# ---------------------------------------------------------------------------

INTERACTIVE_HELP = """\
Available commands:
  encode <base> <message>    (e)  - Encode message into base character
  encode-safe <base> <msg>   (es) - Encode using the ZWJ scheme
  decode                     (d)  - Decode first message from clipboard
  decode-all                 (da) - Decode all messages from clipboard
  decode-safe                (ds) - Decode ZWJ-encoded message
  check                      (c)  - Check if clipboard has hidden data
  check-safe                 (cs) - Check if clipboard has ZWJ-encoded data
  stats                      (s)  - Show clipboard statistics
  raw                        (r)  - Show raw clipboard content
  visible                    (v)  - Show only visible characters
  set <text>                      - Set clipboard to plain text
  clear                           - Clear clipboard
  help                       (h)  - Show this help
  quit                       (q)  - Exit interactive mode"""


def _interactive_command(transcoder: ClipboardTranscoder, line: str, out: TextIO) -> bool:
    """Run one REPL line. Returns ``False`` when the session should end."""

    def say(msg: str) -> None:
        print(msg, file=out)

    command, _, rest = line.partition(" ")
    command = command.lower()
    rest = rest.strip()

    if command in ("quit", "exit", "q"):
        say("Goodbye!")
        return False
    if command in ("help", "h"):
        say(INTERACTIVE_HELP)
    elif command in ("encode", "e", "encode-safe", "es"):
        carrier, _, message = rest.partition(" ")
        if not carrier or not message:
            say(f"Usage: {command} <base_char> <message>")
        elif command in ("encode", "e"):
            transcoder.encode_and_write(carrier, message)
            say(f'Encoded "{message}" into {carrier}')
        else:
            transcoder.encode_safe_and_write(carrier, message)
            say(f'Safe-encoded "{message}" into {carrier}')
    elif command in ("decode", "d"):
        decoded = transcoder.read_and_decode()
        say(f'Decoded: "{decoded}"' if decoded else "No hidden messages found")
    elif command in ("decode-all", "da"):
        messages = transcoder.read_and_decode_all()
        if not messages:
            say("No hidden messages found")
        else:
            say(f"Found {len(messages)} message(s):")
            for entry in _format_messages(messages):
                say(entry)
    elif command in ("decode-safe", "ds"):
        decoded = transcoder.read_and_decode_safe()
        say(f'ZWJ-decoded: "{decoded}"' if decoded else "No ZWJ-encoded messages found")
    elif command in ("check", "c"):
        say("Has hidden data" if transcoder.has_hidden_data() else "No hidden data")
    elif command in ("check-safe", "cs"):
        say("Has ZWJ-encoded data" if transcoder.has_safe_hidden_data() else "No ZWJ-encoded data")
    elif command in ("stats", "s"):
        stats = transcoder.get_stats()
        say(
            f"Stats: {stats.visible_length} visible, {stats.hidden_bytes} hidden, "
            f"{stats.message_count} messages"
        )
    elif command in ("raw", "r"):
        raw = transcoder.get_raw_text()
        say(f'Raw: "{raw}"' if raw else "Clipboard is empty")
    elif command in ("visible", "v"):
        raw = transcoder.get_raw_text()
        say(f'Visible: "{transcoder.get_visible_text()}"' if raw else "Clipboard is empty")
    elif command == "set":
        if not rest:
            say("Usage: set <text>")
        else:
            transcoder.set_raw_text(rest)
            say(f'Set clipboard to: "{rest}"')
    elif command == "clear":
        transcoder.set_raw_text("")
        say("Cleared clipboard")
    else:
        say(f"Unknown command: {command}")
        say('Type "help" for available commands')
    return True


def run_interactive(
    transcoder: ClipboardTranscoder,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Read commands line by line until ``quit`` or end of input.

    Errors are reported and the session continues.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    print("emojistego interactive mode", file=stdout)
    print('Type "help" for commands or "quit" to exit.', file=stdout)

    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            print(file=stdout)
            return
        line = line.strip()
        if not line:
            continue
        try:
            if not _interactive_command(transcoder, line, stdout):
                return
        except StegoError as exc:
            print(f"Error: {exc}", file=stdout)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None, clipboard: Clipboard | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    verbose = args.verbose

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )

    try:
        settings = load_settings()
        if clipboard is None:
            clipboard = SystemClipboard(settings.clipboard_backend)

        command = args.command
        if command is None:
            if not sys.stdin.isatty():
                parser.print_help()
                sys.exit(1)
            command = "interactive"

        codec = _resolve_codec(args, settings)

        if command == "encode":
            _cmd_encode(codec, args, clipboard, verbose)
        elif command == "encode-multiple":
            _cmd_encode_multiple(codec, args, clipboard, verbose)
        elif command == "decode":
            _cmd_decode(codec, args, clipboard, verbose)
        elif command == "check":
            _cmd_check(args, clipboard)
        elif command == "stats":
            _cmd_stats(codec, args, clipboard)
        elif command == "visible":
            _cmd_visible(codec, args, clipboard)
        elif command == "raw":
            _cmd_raw(clipboard)
        elif command == "set":
            _cmd_set(args, clipboard)
        elif command == "schemes":
            _cmd_schemes()
        else:
            run_interactive(ClipboardTranscoder(clipboard))
    except StegoError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        sys.exit(1)
    except OSError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
