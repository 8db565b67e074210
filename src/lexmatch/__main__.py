from __future__ import annotations
import argparse, logging, sys
from . import __version__
from . import config as CFG
from .engine import Engine
from .errors import ConfigurationError, ResourceError
from .models import MatchOptions
from .output import JsonLinesWriter, TsvWriter


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lexmatch",
        description="Simple lexicon matcher powered by either suffix arrays or hash tables. "
                    "In the former case it matches lookups from a lexicon to a text and returns, "
                    "for each, the number of hits and the hits themselves (byte offsets to the start position).",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-l", "--lexicon", action="append", default=[],
                   help="Lexicon with one entry per line; for TSV only the first column is used. "
                        "Entries may be phrases unless --tokens is set. Repeat for multiple lexicons.")
    p.add_argument("-q", "--query", action="append", default=[],
                   help="A word/phrase to look up; command-line alternative to a lexicon (repeatable)")
    p.add_argument("-a", "--all", action="store_true",
                   help="Return all matches (also as substrings) rather than only exact matches")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="One TSV row per match, with a header. Implied by --tokens and --cjk")
    p.add_argument("-T", "--tokens", "--hash", action="store_true",
                   help="Token lookup in a hash table instead of a suffix array "
                        "(languages with whitespace/punctuation between words)")
    p.add_argument("-C", "--cjk", "--greedy-chars", type=int, default=None, metavar="N",
                   help="Greedy character-window lookup, N = maximum window length in characters "
                        "(Chinese, Japanese, Korean)")
    p.add_argument("--coverage", action="store_true",
                   help="With --tokens: share of tokens covered by the lexicons; with --cjk: share of characters")
    p.add_argument("--coverage-matrix", action="store_true",
                   help="Coverage per input line, one column per lexicon plus an aggregate column")
    p.add_argument("-M", "--count-only", "--no-matches", dest="count_only", action="store_true",
                   help="Only return the number of matches, not their offsets (substring mode)")
    p.add_argument("-f", "--freq", type=int, default=CFG.FREQ_THRESHOLD,
                   help="Absolute frequency threshold; 0 returns the entire lexicon (substring mode)")
    p.add_argument("-i", "--ignore-case", action="store_true",
                   help="Lowercase lexicons and texts before matching")
    p.add_argument("-m", "--min-token-length", type=int, default=CFG.MIN_TOKEN_LENGTH,
                   help="Ignore tokens shorter than this many characters (--tokens)")
    p.add_argument("--unicode-boundaries", action="store_true",
                   help="Judge exact-match boundaries on whole characters instead of single bytes")
    p.add_argument("--json", action="store_true", help="Emit JSON lines instead of TSV")
    p.add_argument("--log", action="store_true", help="Log progress to stderr")
    p.add_argument("textfile", nargs="+",
                   help="Plain-text UTF-8 file(s) to operate on; - for standard input")
    return p


def options_from_args(args: argparse.Namespace) -> MatchOptions:
    if args.tokens and args.cjk is not None:
        raise ConfigurationError("--tokens and --cjk are mutually exclusive")
    mode = "tokens" if args.tokens else "window" if args.cjk is not None else "substring"
    return MatchOptions(
        mode=mode,
        all_matches=args.all,
        freq_threshold=args.freq,
        verbose=args.verbose,
        case_insensitive=args.ignore_case,
        min_token_length=args.min_token_length,
        max_window_length=args.cjk,
        coverage=args.coverage,
        coverage_matrix=args.coverage_matrix,
        suppress_offsets=args.count_only,
        unicode_boundaries=args.unicode_boundaries,
    ).validate()


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.log else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    eng = None
    try:
        eng = Engine(options_from_args(args))
        eng.load(args.lexicon, args.query)
        if args.json:
            writer = JsonLinesWriter(sys.stdout)
        else:
            writer = TsvWriter(sys.stdout, eng.lexicons.names, len(args.textfile), eng.options)
        writer.begin()
        for record in eng.run(args.textfile):
            writer.write(record)
        return 0
    except ConfigurationError as e:
        p.error(str(e))
    except ResourceError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        if eng is not None:
            eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
