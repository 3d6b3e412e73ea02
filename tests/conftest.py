import pytest

from citelight.highlight.types import Chunk
from tests.factories import make_chunk


@pytest.fixture
def sandwich_chunk() -> Chunk:
    return make_chunk(
        content="The sandwich method reduces price resistance by emphasizing benefits twice.",
    )
