"""Unit tests for name_normalizer utility.

Test Strategy:
1. Test suffix removal (Jr, Sr, II, III)
2. Test punctuation and accent normalization
3. Test slugs for sportscaster names
4. Test NameIndex resolution order: exact, last name, word overlap, fuzzy

Each test follows the pattern:
- Given: An input name with specific issues
- When: normalize(), slugify() or NameIndex.resolve() is called
- Then: Output matches the expected form or player id
"""
import pytest

from confidence_pool.utils.name_normalizer import NameIndex, normalize, slugify


class TestNormalize:
    """Test suite for name normalization functionality."""

    def test_removes_suffixes(self):
        """Should remove a trailing generational suffix."""
        assert normalize("Marvin Harrison Jr.") == "marvin harrison"
        assert normalize("Kenneth Walker III") == "kenneth walker"
        assert normalize("Dale Ellis Sr") == "dale ellis"

    def test_keeps_single_word_that_looks_like_suffix(self):
        assert normalize("IV") == "iv"

    def test_removes_punctuation(self):
        assert normalize("T.J. Watt") == "tj watt"
        assert normalize("Ja'Marr Chase") == "jamarr chase"

    def test_removes_accents(self):
        assert normalize("Luka Dončić") == "luka doncic"
        assert normalize("José Ramírez") == "jose ramirez"

    def test_lowercases_and_collapses_whitespace(self):
        assert normalize("  CAM   WARD ") == "cam ward"

    @pytest.mark.parametrize("value", ["", None])
    def test_empty(self, value):
        assert normalize(value) == ""


class TestSlugify:
    """Test suite for sportscaster slugs."""

    def test_slugify(self):
        assert slugify("Mel Kiper Jr.") == "mel-kiper-jr"
        assert slugify("  Daniel  Jeremiah ") == "daniel-jeremiah"
        assert slugify("Todd McShay") == "todd-mcshay"

    def test_drops_non_ascii(self):
        assert slugify("Peter Schrager!") == "peter-schrager"
        assert slugify("") == ""


class TestNameIndex:
    """Test suite for prospect name resolution."""

    @pytest.fixture
    def index(self):
        return NameIndex([
            ("p1", "Cam Ward"),
            ("p2", "Travis Hunter"),
            ("p3", "Abdul Carter"),
            ("p6", "Marvin Harrison Jr."),
            ("j1", "Will Johnson"),
            ("j2", "Jahdae Johnson"),
        ])

    def test_exact_match(self, index):
        assert index.resolve("CAM WARD") == ("p1", "exact")
        assert index.resolve("Marvin Harrison") == ("p6", "exact")

    def test_unique_last_name(self, index):
        assert index.resolve("T. Hunter") == ("p2", "last_name")

    def test_shared_last_name_uses_word_overlap(self, index):
        assert index.resolve("Will D. Johnson") == ("j1", "word_overlap")

    def test_fuzzy_match(self, index):
        assert index.resolve("Abdul Cartr") == ("p3", "fuzzy")

    def test_no_match(self, index):
        assert index.resolve("Nobody Known") == (None, None)
        assert index.resolve("") == (None, None)

    def test_empty_index(self):
        assert NameIndex([]).resolve("Cam Ward") == (None, None)
        assert len(NameIndex([("p1", "Cam Ward"), ("x", "")])) == 1
