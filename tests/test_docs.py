"""
Documentation tree checks: the root document exists and every module the API
reference pulls in is importable.
"""

import importlib
import os
import re
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

DOCS_SOURCE = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "docs", "source"
)


def read_doc(name):
    with open(os.path.join(DOCS_SOURCE, name), encoding="utf-8") as f:
        return f.read()


def test_root_document_links_api():
    index = read_doc("index.rst")
    assert ".. toctree::" in index
    assert re.search(r"^\s+api\s*$", index, re.MULTILINE)


@pytest.mark.parametrize(
    "module", re.findall(r"^\.\. automodule:: (\S+)", read_doc("api.rst"), re.MULTILINE)
)
def test_api_modules_importable(module):
    assert importlib.import_module(module).__doc__


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
