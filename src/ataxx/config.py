import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_SEARCH_DEPTH = 4


def parse_search_depth(string: str) -> int:
    try:
        depth = int(string)
    except ValueError:
        raise ValueError(f'Search depth must be an integer, got "{string}"') from None

    if depth < 1:
        raise ValueError(f"Search depth must be at least 1, got {depth}")

    return depth


def get_search_depth() -> int:
    raw = os.getenv("ATAXX_SEARCH_DEPTH")

    if raw is None:
        return DEFAULT_SEARCH_DEPTH

    return parse_search_depth(raw)


def get_ai_verbose() -> bool:
    return os.getenv("ATAXX_AI_VERBOSE", "0") != "0"
