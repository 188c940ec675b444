"""
Metadata lookups.

``MetadataResolver`` reads JSON records from an explicit directory and picks
the most recently modified one. ``RequestMetadataResolver`` looks records up
in the ``StatementRequest`` table, either by primary key or by creation time.
"""
import json
import logging
from pathlib import Path

from .documents import StatementMetadata
from .exceptions import MalformedInputError, NotFoundError, StatementIOError
from .models import StatementRequest

logger = logging.getLogger(__name__)


def latest_file(directory):
    """Return the regular file in ``directory`` with the greatest modification time."""
    directory = Path(directory)
    try:
        entries = [p for p in directory.iterdir() if p.is_file() and not p.name.startswith(".")]
    except FileNotFoundError as exc:
        raise NotFoundError(f"Directory does not exist: {directory}") from exc
    except OSError as exc:
        raise StatementIOError(f"Could not list {directory}: {exc}") from exc

    latest = None
    latest_mtime = None
    for entry in entries:
        mtime = entry.stat().st_mtime_ns
        if latest_mtime is None or mtime > latest_mtime:
            latest, latest_mtime = entry, mtime

    if latest is None:
        raise NotFoundError(f"No files found in {directory}")
    logger.debug("Latest file in %s: %s", directory, latest.name)
    return latest


class MetadataResolver:

    def __init__(self, directory):
        self.directory = Path(directory)

    def resolve(self):
        path = latest_file(self.directory)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise MalformedInputError(f"Metadata record {path.name} is not valid JSON") from exc
        except OSError as exc:
            raise StatementIOError(f"Could not read metadata record {path.name}: {exc}") from exc
        if not isinstance(data, dict):
            raise MalformedInputError(f"Metadata record {path.name} is not an object")
        return StatementMetadata.from_dict(data)


class RequestMetadataResolver:

    def __init__(self, queryset=None):
        self.queryset = queryset

    def _get_queryset(self):
        if self.queryset is not None:
            return self.queryset
        return StatementRequest.objects.all()

    def resolve_request(self, pk=None):
        queryset = self._get_queryset()
        model = queryset.model
        try:
            if pk is None:
                return queryset.latest()
            return queryset.get(pk=pk)
        except model.DoesNotExist as exc:
            label = "any statement request" if pk is None else f"statement request {pk}"
            raise NotFoundError(f"Could not find {label}") from exc

    def resolve(self, pk=None):
        return self.resolve_request(pk).metadata

