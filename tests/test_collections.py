#
# Boundshow - Collection Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from boundshow.collections import CollectionView, DictionaryView
from boundshow.shapes import Speed
from boundshow.showing import InvalidFormatError, render_bounded


# Tests ----------------------------------------------------------------------------------------------------------------
class TestCollectionView:

    @pytest.fixture
    def words(self):
        """Fixture providing a bag view over repeated words."""
        return CollectionView(["apple", "banana", "apple"], allows_duplicates=True)

    def test_iteration(self, words):
        assert list(words) == ["apple", "banana", "apple"]
        assert list(words) == ["apple", "banana", "apple"]
        assert len(words) == 3

    def test_item_multiplicities(self, words):
        assert list(words.item_multiplicities()) == [("apple", 2), ("banana", 1)]

    def test_str(self, words):
        assert str(words) == "{{ apple, banana, apple }}"

    def test_format_directive(self, words):
        assert f"{words:L8}" == "{{ apple... }}"

    def test_format_invalid(self, words):
        with pytest.raises(InvalidFormatError):
            f"{words:Lbad}"

    def test_counting(self):
        view = CollectionView("mississippi", allows_duplicates=True, duplicates_by_counting=True)
        assert str(view) == "{{ m(*1), i(*4), s(*4), p(*2) }}"

    def test_speed_coerced(self):
        assert CollectionView([], indexing_speed="constant").indexing_speed is Speed.CONSTANT

    def test_iterator_rejected(self):
        with pytest.raises(TypeError, match="items must be re-iterable"):
            CollectionView(iter([1, 2]))

    def test_counting_requires_duplicates(self):
        with pytest.raises(ValueError, match="duplicates_by_counting requires allows_duplicates"):
            CollectionView([1], duplicates_by_counting=True)

    def test_repr(self):
        assert repr(CollectionView([1])) == (
            "CollectionView([1], allows_duplicates=False, duplicates_by_counting=False, "
            "indexing_speed=<Speed.LINEAR: 'linear'>)"
        )

    def test_same_as_render_bounded(self, words):
        assert render_bounded(words) == str(words)


class TestDictionaryView:

    @pytest.fixture
    def fruit(self):
        """Fixture providing a key-ordered view over an unordered mapping."""
        return DictionaryView({"cherry": 3, "apple": 1, "banana": 2}, key_ordered=True)

    def test_lookup(self, fruit):
        assert fruit["banana"] == 2
        assert fruit.get("durian") is None
        assert "apple" in fruit
        assert len(fruit) == 3

    def test_sorted_iteration(self, fruit):
        assert list(fruit) == ["apple", "banana", "cherry"]
        assert list(fruit.values()) == [1, 2, 3]
        assert list(fruit.items()) == [("apple", 1), ("banana", 2), ("cherry", 3)]

    def test_unordered_iteration(self):
        view = DictionaryView({"b": 1, "a": 2})
        assert list(view.keys()) == ["b", "a"]
        assert str(view) == "{ b => 1, a => 2 }"

    def test_str(self, fruit):
        assert str(fruit) == "[ apple => 1, banana => 2, cherry => 3 ]"

    def test_format_directive(self, fruit):
        assert f"{fruit:L14}" == "[ apple => 1... ]"

    def test_equality(self, fruit):
        assert fruit == {"apple": 1, "banana": 2, "cherry": 3}
        assert fruit != {"apple": 1}
        assert (fruit == 42) is False

    def test_unhashable(self, fruit):
        with pytest.raises(TypeError):
            hash(fruit)

    def test_repr(self):
        assert repr(DictionaryView({"a": 1})) == "DictionaryView({'a': 1}, key_ordered=False)"
