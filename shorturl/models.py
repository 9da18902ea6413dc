from dataclasses import dataclass


# fmt: off
@dataclass(frozen=True)
class UrlMapping:
    short_id: str   # Unique short identifier (primary key)
    long_url: str   # Original long URL (unique across all mappings)
# fmt: on
