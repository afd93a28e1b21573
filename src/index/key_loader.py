"""Build double-array tries from key files and query them."""

import logging
import time
from pathlib import Path
from typing import Optional

from src.custom_data_structures.double_array_trie.double_array_trie import (
    DoubleArrayTrie,
)
from src.custom_data_structures.double_array_trie.mapper import (
    CharacterValueMapper,
    LowercaseCharacterValueMapper,
)

logger = logging.getLogger(__name__)


def build_trie(
    data_path: Path,
    mapper: Optional[CharacterValueMapper] = None,
    initial_capacity: int = 16,
) -> DoubleArrayTrie:
    """Insert all the lines of a key file into a double-array trie.

    Lines are stripped and blank lines are skipped.

    Args:
        data_path (Path): The file holding one key per line.
        mapper (CharacterValueMapper, optional): The character mapping,
            lowercase letters by default.
        initial_capacity (int): Initial length of the trie arrays.

    Raises:
        FileNotFoundError: If the file specified by `data_path` does not exist.
        Exception: If an error occurs while reading or inserting the keys.

    Returns:
        DoubleArrayTrie: The trie holding every key of the file.

    """
    if mapper is None:
        mapper = LowercaseCharacterValueMapper()

    data_trie = DoubleArrayTrie(mapper, initial_capacity)
    try:
        with data_path.open("r", encoding="utf-8") as file:
            for line_number, line in enumerate(file, start=1):
                key = line.strip()
                if not key:
                    continue
                try:
                    data_trie.add(key)
                except ValueError as e:
                    raise ValueError(
                        f"Invalid key on line {line_number} of "
                        f"{data_path}: {e!s}",
                    ) from e

    except FileNotFoundError as e:
        # Raise an error if the file does not exist
        raise FileNotFoundError(f"File not found: {data_path}") from e

    except ValueError:
        raise

    except Exception as e:
        raise Exception(f"An error occurred: {e!s}") from e

    logger.info("Loaded %d keys from %s.", len(data_trie), data_path)
    return data_trie


def trie_search(data_path: Path, query_string: str) -> bool:
    """Check for the existence of a query string in a key file by loading
    it into a double-array trie.

    Args:
        data_path (Path): The path of the data file to search in.
        query_string (str): The string to search for.

    Raises:
        FileNotFoundError: If the file specified by `data_path` does not exist.

    Returns:
        bool: True if the query string is one of the keys. Otherwise, False.

    """
    return build_trie(data_path).contains(query_string)


def timed_contains(
    data_trie: DoubleArrayTrie,
    query_string: str,
) -> tuple[bool, float]:
    """Look up a query string and measure how long it took.

    Returns:
        tuple[bool, float]: The lookup result and the elapsed time in
        milliseconds.

    """
    start_time = time.perf_counter()
    result = data_trie.contains(query_string)
    execution_time_ms = (time.perf_counter() - start_time) * 1000
    return result, execution_time_ms
