import pytest

from app.core.errors import InvalidFolder
from app.services.locator import StorageLocator, extension_of, token_of


@pytest.mark.parametrize(
    "name, expected",
    [
        ("report.pdf", ".pdf"),
        ("archive.tar.gz", ".gz"),
        ("notes", ""),
        (".env", ""),
        ("dir/sub/photo.jpeg", ".jpeg"),
        ("C:\\Users\\me\\data.csv", ".csv"),
        ("", ""),
        (None, ""),
    ],
)
def test_extension_of(name, expected):
    assert extension_of(name) == expected


def test_token_of_ignores_extension_length():
    assert token_of("abc.txt") == "abc"
    assert token_of("abc.jpeg") == "abc"
    assert token_of("abc.tar.gz") == "abc"
    assert token_of("abc") == "abc"


def test_folder_path_defaults(locator, tmp_path):
    base = (tmp_path / "storage").resolve()
    assert locator.folder_path() == base / "uploads"
    assert locator.folder_path("") == base / "uploads"
    assert locator.folder_path("team-a") == base / "team-a"
    assert locator.folder_path("team-a/2024") == base / "team-a" / "2024"


def test_resolve_joins_folder_token_extension(locator, tmp_path):
    path = locator.resolve(None, "tok", ".pdf")
    assert path == (tmp_path / "storage").resolve() / "uploads" / "tok.pdf"
    assert locator.resolve("x", "tok").name == "tok"


def test_ensure_folder_is_idempotent(locator):
    first = locator.ensure_folder("nested/deeper")
    second = locator.ensure_folder("nested/deeper")
    assert first == second
    assert first.is_dir()


@pytest.mark.parametrize("folder", ["../outside", "a/../../b", "/etc", ".", "a/.."])
def test_confined_locator_rejects_escaping_folders(locator, folder):
    with pytest.raises(InvalidFolder):
        locator.folder_path(folder)


def test_unconfined_locator_joins_verbatim(tmp_path):
    loose = StorageLocator(tmp_path / "storage", "uploads", confine=False)
    assert loose.folder_path("../outside") == (tmp_path / "storage").resolve() / "../outside"
