"""
Reading and writing JSON documents on disk.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from jsonvista.patcher import serialize_document
from jsonvista.stores import parse_json_text

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT = """{
  "fruits": [
    {
      "name": "Apple",
      "color": "#FF0000",
      "details": {
        "type": "Pome",
        "season": "Fall"
      },
      "nutrients": {
        "calories": 52,
        "fiber": "2.4g",
        "vitaminC": "4.6mg"
      }
    },
    {
      "name": "Banana",
      "color": "#FFFF00",
      "details": {
        "type": "Berry",
        "season": "Year-round"
      },
      "nutrients": {
        "calories": 89,
        "fiber": "2.6g",
        "potassium": "358mg"
      }
    }
  ],
  "inStock": true,
  "discontinued": null
}"""


def load_document(path: Union[str, Path]) -> str:
    """Read a document as UTF-8 text. The text is not validated here."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    logger.info(f"Loaded document {path} ({len(text)} chars)")
    return text


def save_document(path: Union[str, Path], text: str) -> None:
    """Write a document atomically (temp file in the same directory, then replace)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=path.name + ".", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)
    logger.info(f"Saved document {path}")


def format_document(text: str) -> str:
    """
    Re-serialize text with the standard formatting.

    Raises DocumentStateError if the text is not valid JSON.
    """
    return serialize_document(parse_json_text(text))
