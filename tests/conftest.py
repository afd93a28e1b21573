import pytest

from src.custom_data_structures.double_array_trie.double_array_trie import (
    DoubleArrayTrie,
)
from src.custom_data_structures.double_array_trie.mapper import (
    LowercaseCharacterValueMapper,
)
from tests.trie_constants import TEST_KEYS


@pytest.fixture
def mapper():
    return LowercaseCharacterValueMapper()


@pytest.fixture
def trie(mapper):
    return DoubleArrayTrie(mapper)


@pytest.fixture
def populated_trie(trie):
    for key in TEST_KEYS:
        trie.add(key)
    return trie


@pytest.fixture
def keys_file(tmp_path):
    file_path = tmp_path / "keys.txt"
    file_path.write_text("\n".join(TEST_KEYS) + "\n", encoding="utf-8")
    return file_path
