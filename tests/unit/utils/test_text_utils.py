import pytest

from sergas.utils.text_utils import slugify


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Instalaciones de Gas", "instalaciones-de-gas"),
        ("  Electricidad  Industrial ", "electricidad-industrial"),
        ("Climatización / Calefacción", "climatizacion-calefaccion"),
        ("---", ""),
    ],
)
def test_slugify(raw: str, expected: str) -> None:
    assert slugify(raw) == expected
