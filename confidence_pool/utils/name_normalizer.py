"""Name normalization utilities for prospect and sportscaster names.

Handles common variations between mock draft sources and the prospect list:
- Suffixes: "Jr.", "Sr.", "III", "IV", "II"
- Punctuation: "T.J. Watt" → "tj watt"
- Accents: "Dončić" → "doncic"
- Case: "CAM WARD" → "cam ward"
- Extra spaces: "Travis  Hunter" → "travis hunter"
"""
import re
import unicodedata
from typing import Dict, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz, process


# Common name suffixes that should be removed for comparison
SUFFIXES = {
    'jr', 'sr', 'iii', 'iv', 'ii', 'v', 'vi', 'vii', 'viii', 'ix',
}

FUZZY_THRESHOLD = 90


def normalize(name: str) -> str:
    """
    Normalize a name for comparison by removing variations.

    Steps:
    1. Remove common suffixes (Jr, Sr, III, etc.)
    2. Normalize unicode characters (accents)
    3. Convert to lowercase
    4. Remove punctuation (but keep letters)
    5. Remove extra whitespace

    Examples:
        >>> normalize("T.J. Watt")
        'tj watt'
        >>> normalize("Marvin Harrison Jr.")
        'marvin harrison'
        >>> normalize("Travis  Hunter")
        'travis hunter'
    """
    if not name:
        return ""

    name = _remove_suffixes(name)
    name = _normalize_unicode(name)
    name = name.lower()
    name = re.sub(r'[^\w\s]', '', name)
    return ' '.join(name.split())


def _remove_suffixes(name: str) -> str:
    """Remove a trailing Jr/Sr/II/III... from a name."""
    parts = name.split()

    if len(parts) > 1 and parts[-1].lower().replace('.', '') in SUFFIXES:
        return ' '.join(parts[:-1])

    return name


def _normalize_unicode(name: str) -> str:
    """Converts 'č' → 'c', 'ś' → 's', 'ž' → 'z', etc."""
    normalized = unicodedata.normalize('NFD', name)
    return ''.join(
        c for c in normalized
        if unicodedata.category(c) != 'Mn'
    )


def slugify(name: str) -> str:
    """
    URL slug for a sportscaster name.

    Lowercases, drops everything but ASCII letters, digits and whitespace,
    then joins the words with hyphens.

    Examples:
        >>> slugify("Mel Kiper Jr.")
        'mel-kiper-jr'
        >>> slugify("  Daniel  Jeremiah ")
        'daniel-jeremiah'
    """
    cleaned = re.sub(r'[^a-z0-9\s]', '', (name or '').lower())
    return re.sub(r'\s+', '-', cleaned.strip())


class NameIndex:
    """
    Resolves free-text prospect names to player ids.

    Resolution order:
    1. Exact normalized name
    2. Last name, when only one prospect has it
    3. Among prospects sharing the last name, the one with the most words in common
    4. Fuzzy match (rapidfuzz WRatio >= threshold, 90 by default) against every prospect

    Usage:
        index = NameIndex([(p.id, p.name) for p in players])
        player_id, method = index.resolve("Cam Ward")
    """

    def __init__(self, players: Sequence[Tuple[str, str]], threshold: int = FUZZY_THRESHOLD):
        self.threshold = threshold
        self._by_name: Dict[str, str] = {}
        self._by_last_name: Dict[str, List[Tuple[str, str]]] = {}
        for player_id, name in players:
            normalized = normalize(name)
            if not normalized:
                continue
            self._by_name[normalized] = player_id
            last_name = normalized.split()[-1]
            self._by_last_name.setdefault(last_name, []).append((player_id, normalized))

    def __len__(self) -> int:
        return len(self._by_name)

    def resolve(self, name: str) -> Tuple[Optional[str], Optional[str]]:
        """
        Resolve a name.

        Returns:
            (player_id, method) where method is "exact", "last_name",
            "word_overlap" or "fuzzy"; (None, None) when nothing matches
        """
        normalized = normalize(name)
        if not normalized:
            return None, None

        player_id = self._by_name.get(normalized)
        if player_id:
            return player_id, "exact"

        words = normalized.split()
        candidates = self._by_last_name.get(words[-1], [])
        if len(candidates) == 1:
            return candidates[0][0], "last_name"
        if candidates:
            best_id, best_overlap = None, 0
            for candidate_id, candidate_name in candidates:
                candidate_words = candidate_name.split()
                overlap = sum(1 for word in words if word in candidate_words)
                if overlap > best_overlap:
                    best_id, best_overlap = candidate_id, overlap
            if best_id is not None:
                return best_id, "word_overlap"

        return self._fuzzy(normalized)

    def _fuzzy(self, normalized: str) -> Tuple[Optional[str], Optional[str]]:
        if not self._by_name:
            return None, None
        match = process.extractOne(
            normalized,
            list(self._by_name.keys()),
            scorer=fuzz.WRatio,
            score_cutoff=self.threshold,
        )
        if match is None:
            return None, None
        return self._by_name[match[0]], "fuzzy"
