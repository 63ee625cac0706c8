import sys
import argparse
from pathlib import Path

from . import __version__
from .ciphers.caesar import DEFAULT_SHIFT
from .engine import CIPHER_REGISTRY, DEFAULT_CIPHER, Operation
from .errors import BaziCipherError, EmptyInputError
from .history import export_bytes, export_filename, format_timestamp
from .log import log_info, log_warn, set_verbose
from .session import Session
from .storage import JsonFileStore, MemoryStore, default_store_path

LIST_WIDTH = 30


def truncate(text: str, width: int = LIST_WIDTH) -> str:
    """Shorten text for one-line listings."""
    text = text.replace("\n", " ")
    return text if len(text) <= width else text[:width - 3] + "..."


def list_ciphers(session: Session):
    """Print all available ciphers."""
    print("\nAvailable Ciphers:")
    print("=" * 60)
    for item in session.engine.list_ciphers():
        cipher = session.engine.get(item["id"])
        print(f"  {item['id']:<10} {item['display_name']:<28} {cipher.description}")
    print("=" * 60)
    print(f"\nTotal: {len(CIPHER_REGISTRY)} cipher(s) registered.")


def show_history(session: Session):
    entries = session.ledger.list_entries()
    if not entries:
        print("History is empty.")
        return
    for entry in entries:
        print(f"{entry.id[:12]}  {format_timestamp(entry.timestamp)}  "
              f"{entry.operation.value:<8} {entry.algorithm:<28} "
              f"{truncate(entry.original)}  ->  {truncate(entry.result)}")


def resolve_entry_id(session: Session, prefix: str) -> str:
    """Accept a full id or a unique prefix of one (listings show 12 chars)."""
    if not prefix:
        sys.exit("Error: history id must not be empty.")
    matches = [e.id for e in session.ledger.entries if e.id.startswith(prefix)]
    if len(matches) != 1:
        sys.exit(f"Error: {'no' if not matches else 'more than one'} history entry matches '{prefix}'.")
    return matches[0]


def show_entry(session: Session, entry_id: str):
    entry = session.ledger.get(resolve_entry_id(session, entry_id))
    print(f"Id:        {entry.id}")
    print(f"Time:      {format_timestamp(entry.timestamp)}")
    print(f"Operation: {entry.operation.value}")
    print(f"Algorithm: {entry.algorithm}")
    print(f"Original:  {entry.original}")
    print(f"Result:    {entry.result}")


def export_history(session: Session, path: str):
    entries = session.ledger.entries
    if not entries:
        log_warn("No history to export.", always=True)
        return
    target = Path(path) if path else Path(export_filename())
    if target.is_dir():
        target = target / export_filename()
    try:
        target.write_bytes(export_bytes(entries))
    except OSError as e:
        sys.exit(f"Error writing export: {e}")
    print(f"Exported {len(entries)} entr{'y' if len(entries) == 1 else 'ies'} to {target}")


def read_input(args) -> str:
    if args.text:
        return args.text
    if args.input:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            sys.exit(f"Error: File '{args.input}' not found.")
    if not sys.stdin.isatty():
        return sys.stdin.read()
    print("[CIPHER] Paste input below. Ctrl+D (Unix) or Ctrl+Z (Win) to end:")
    try:
        return sys.stdin.read()
    except KeyboardInterrupt:
        sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bazi-cipher",
        description="Bazi Cipher: dot, reverse and Caesar text ciphers with history",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    method_help = "\n".join(f"  {k:<10}: {v.description}" for k, v in CIPHER_REGISTRY.items())
    parser.add_argument("-m", "--method", choices=list(CIPHER_REGISTRY.keys()), default=DEFAULT_CIPHER,
                        help=f"Select cipher algorithm (default: {DEFAULT_CIPHER}).\n{method_help}")
    parser.add_argument("--shift", type=int, default=DEFAULT_SHIFT, metavar="N",
                        help=f"Caesar shift (default: {DEFAULT_SHIFT}). Any integer, taken mod 26.")

    # Main action group
    action_group = parser.add_mutually_exclusive_group(required=True)
    action_group.add_argument("-e", "--encode", action="store_true", help="Encrypt mode")
    action_group.add_argument("-d", "--decode", action="store_true", help="Decrypt mode")
    action_group.add_argument("-l", "--list", action="store_true", help="List all available ciphers")
    action_group.add_argument("--history", action="store_true", help="Show history, most recent first")
    action_group.add_argument("--show", metavar="ID", help="Show one history entry in full")
    action_group.add_argument("--delete", metavar="ID", help="Delete one history entry")
    action_group.add_argument("--clear-history", action="store_true", help="Delete all history entries")
    action_group.add_argument("--export", nargs="?", const="", metavar="PATH",
                              help="Export history as a text report (default: dated file in cwd)")

    # History store
    parser.add_argument("--store", type=str, metavar="PATH",
                        help=f"History store file (default: {default_store_path()})")
    parser.add_argument("--no-history", action="store_true",
                        help="Do not record this operation in the history")

    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable verbose output (info and warning messages)")

    # I/O options
    io_group = parser.add_mutually_exclusive_group()
    io_group.add_argument("-t", "--text", help="Direct text input")
    io_group.add_argument("-i", "--input", help="Input file path")

    parser.add_argument("-o", "--output", help="Output file path")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    set_verbose(args.verbose)

    transforming = args.encode or args.decode
    if args.list or (transforming and args.no_history):
        store = MemoryStore()
    else:
        store = JsonFileStore(args.store or default_store_path())
        log_info(f"Using history store {store.path}")

    session = Session.open(store, cipher_id=args.method, record_history=not args.no_history)
    session.set_shift(args.shift)

    if args.list:
        list_ciphers(session)
        return
    if args.history:
        show_history(session)
        return
    if args.show is not None:
        show_entry(session, args.show)
        return
    if args.delete is not None:
        session.ledger.delete(resolve_entry_id(session, args.delete))
        print("History entry deleted.")
        return
    if args.clear_history:
        if not len(session.ledger):
            print("History is already empty.")
            return
        session.ledger.clear()
        print("History cleared.")
        return
    if args.export is not None:
        export_history(session, args.export)
        return

    # 1. READ INPUT
    source_text = read_input(args)

    # 2. TRANSFORM
    operation = Operation.ENCRYPT if args.encode else Operation.DECRYPT
    try:
        result = session.perform(operation, source_text)
    except EmptyInputError as e:
        sys.exit(f"Error: {e}")
    except BaziCipherError as e:
        sys.exit(f"{operation.value} Error ({session.cipher.display_name}): {e}")

    # 3. WRITE OUTPUT
    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(result)
                if args.decode: f.write("\n")
        except OSError as e:
            sys.exit(f"Error writing output: {e}")
    else:
        print(result)


if __name__ == "__main__":
    main()
