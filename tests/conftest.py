import pytest

from reports.documents import StatementMetadata


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Keep uploaded and rendered files inside a per-test directory."""
    root = tmp_path / "media"
    root.mkdir()
    settings.MEDIA_ROOT = str(root)
    return root


@pytest.fixture
def metadata():
    return StatementMetadata(
        sender_name="Acme",
        sender_address="1 Main St",
        recipient_name="Beta Co",
        recipient_address="2 Side St",
    )


@pytest.fixture
def sample_rows():
    return [
        ["01/01/2024", "D1", "Sale", 100, 0, 100],
        ["02/01/2024", "D2", "Refund", 0, 50, 50],
    ]
