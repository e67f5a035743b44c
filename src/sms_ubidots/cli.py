from __future__ import annotations

import argparse

from .command import parse_command
from .config import configure_logging, get_settings
from .errors import ParseError, ValueLookupError
from .pipeline import ValueLookup, build_reply
from .ubidots_client import UbidotsClient


def run_query(text: str, lookup: ValueLookup) -> str:
    """
    Parse `text` and fetch the values, returning what would be sent by SMS.

    Errors come back as a one-line message instead of raising.
    """
    try:
        command = parse_command(text)
        return build_reply(command, lookup)
    except (ParseError, ValueLookupError) as exc:
        return f"error: {exc}"


def chat(lookup: ValueLookup) -> None:
    """
    Interactive mode: type commands as you would in the SMS body.

    Nothing is sent via SMS.
    """
    print("Type e.g. 'Devices: kitchen Variables: temperature'. /quit to exit.\n")
    while True:
        try:
            user_input = input("sms> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not user_input:
            continue
        if user_input.lower() in {"/q", "/quit", "/exit"}:
            break
        print(run_query(user_input, lookup))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Run an SMS data request against Ubidots without sending an SMS."
    )
    parser.add_argument(
        "text",
        nargs="?",
        default="",
        help="Command text, e.g. 'Devices: kitchen Variables: temperature'. "
        "If omitted, starts an interactive prompt.",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings)
    lookup = UbidotsClient(settings)

    if args.text:
        print(run_query(args.text, lookup))
    else:
        chat(lookup)


if __name__ == "__main__":
    main()
