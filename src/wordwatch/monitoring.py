"""Monitoring configuration for the app."""
from prometheus_client import Counter, Gauge, start_http_server

# Word list metrics
words_loaded = Gauge(
    "wordwatch_words_loaded",
    "Number of words in the most recently loaded word list",
)

word_list_repairs = Counter(
    "wordwatch_word_list_repairs_total",
    "Total number of word lists that needed punctuation repair to parse",
)

# Practice metrics
words_shown = Counter(
    "wordwatch_words_shown_total",
    "Total number of forward moves to a next word",
    ["list_name"],
)

words_marked_familiar = Counter(
    "wordwatch_words_marked_familiar_total",
    "Total number of times a word was marked familiar",
    ["list_name"],
)

cooldown_fallbacks = Counter(
    "wordwatch_cooldown_fallbacks_total",
    "Times every word was on cooldown and the immediate neighbour was shown",
    ["list_name"],
)

# Error metrics
error_count = Counter(
    "wordwatch_errors_total",
    "Total number of errors encountered",
    ["error_type"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
