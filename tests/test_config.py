from pathlib import Path

import pytest
from pydantic import ValidationError

from src.localgoods.config import Settings


def test_catalog_paths_are_the_only_file_settings():
    file_fields = {name for name, info in Settings.model_fields.items() if info.annotation is Path}
    assert file_fields == {"merchants_file", "products_file"}


def test_catalog_paths_are_expanded(tmp_path):
    settings = Settings(merchants_file=str(tmp_path / "m.csv"), products_file="~/p.csv")
    assert settings.merchants_file == (tmp_path / "m.csv").resolve()
    assert settings.products_file == (Path.home() / "p.csv").resolve()


@pytest.mark.parametrize("count", [0, -2])
def test_fallback_merchant_count_must_be_positive(count):
    with pytest.raises(ValidationError):
        Settings(fallback_merchant_count=count)


def test_origins_accept_comma_separated_values():
    settings = Settings(frontend_allowed_origins="https://a.example, https://b.example")
    assert settings.frontend_allowed_origins == ("https://a.example", "https://b.example")
