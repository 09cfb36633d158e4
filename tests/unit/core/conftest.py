"""Shared fixtures for core unit tests"""

from datetime import datetime

import pytest

from blogbuild.core.models import Metadata
from blogbuild.core.parser import Parser


SAMPLE_TXT = """\
@page About
@header{My *Blog*}
@menu
# Welcome
A paragraph with *bold* and _italic_ text and a [link|https://example.com/].
> Be kind ~ Someone Wise
@date
"""

FIXED_NOW = datetime(2026, 10, 19, 9, 30)


@pytest.fixture(name="parser")
def parser_fixture():
    return Parser()


@pytest.fixture(name="metadata")
def metadata_fixture(tmp_path):
    return Metadata(source=tmp_path / "page.txt", now=FIXED_NOW, snippet_dir=tmp_path)


@pytest.fixture(name="fixed_now")
def fixed_now_fixture():
    return FIXED_NOW


@pytest.fixture(name="sample_nodes")
def sample_nodes_fixture(parser):
    return parser.parse(SAMPLE_TXT)
