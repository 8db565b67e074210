ENCODING: str = "utf-8"

# Exact (boundary-filtered) substring matches unless --all is given
EXACT: bool = True

# Minimum number of hits before a lexicon entry is reported (0 = dump whole lexicon)
FREQ_THRESHOLD: int = 1

VERBOSE_OUTPUT: bool = False
CASE_INSENSITIVE: bool = False

# Token mode: tokens shorter than this (in characters) are never looked up
MIN_TOKEN_LENGTH: int = 0

# Window ("cjk") mode: maximum window length in characters, required for that mode
MAX_WINDOW_LENGTH: int | None = None

# /* ~~~ name of the lexicon that holds --query entries when no lexicon file is given ~~~ */
QUERY_LEXICON_NAME: str = "custom"

# Scanning modes and the coverage scope each one reports
MODES: tuple[str, ...] = ("substring", "tokens", "window")
COVERAGE_SCOPES: dict[str, str] = {"tokens": "tokens", "window": "chars"}

# Separator used when a match belongs to more than one lexicon
LEXICON_SEPARATOR: str = ";"
