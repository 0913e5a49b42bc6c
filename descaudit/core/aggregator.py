"""
Result Aggregator Module

This module turns the JSON report of a linter run into typed offense records
grouped by file, and answers lookups and summary questions about them.
"""

import json
import os
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, Union
import logging

from .errors import ExecutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineLocation:
    """Source location of an offense; line and column are 1-based."""
    line: int
    column: int
    length: int

    def short_str(self) -> str:
        return f"{self.line}: col {self.column}"

    def __str__(self):
        return f"{self.line}: col {self.column} ({self.length} chars)"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LineLocation":
        """
        Build a location from a report entry.

        Raises:
            KeyError: If the line or column is missing
            ValueError: If the line or column isn't a positive integer
        """
        line = data.get('line', data.get('start_line'))
        column = data.get('column', data.get('start_column'))
        if line is None:
            raise KeyError('line')
        if column is None:
            raise KeyError('column')

        location = cls(line=int(line), column=int(column), length=int(data.get('length', 0)))
        if location.line < 1 or location.column < 1:
            raise ValueError(f"location {location.short_str()} is not 1-based")
        return location


@dataclass(frozen=True)
class OffenseRecord:
    """A single offense reported by the linter."""
    severity: str
    message: str
    cop_name: str
    corrected: bool
    location: LineLocation

    @property
    def severity_code(self) -> str:
        return self.severity[:1].upper()

    @property
    def correction_status(self) -> str:
        return "[Corrected] " if self.corrected else ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OffenseRecord":
        if not isinstance(data, Mapping):
            raise TypeError(f"offense must be an object, got {type(data).__name__}")
        location = data['location']
        if not isinstance(location, Mapping):
            raise TypeError(f"location must be an object, got {type(location).__name__}")

        return cls(
            severity=str(data.get('severity', '')),
            message=str(data.get('message', '')),
            cop_name=str(data.get('cop_name', '')),
            corrected=bool(data.get('corrected', False)),
            location=LineLocation.from_dict(location)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'severity': self.severity,
            'message': self.message,
            'cop_name': self.cop_name,
            'corrected': self.corrected,
            'location': {
                'line': self.location.line,
                'column': self.location.column,
                'length': self.location.length,
            },
        }


def _normalize_path(path: Union[str, os.PathLike]) -> str:
    return os.path.realpath(os.fspath(path))


@dataclass(frozen=True)
class RunResult:
    """
    Offenses of one linter run keyed by absolute file path.

    Files without offenses never appear in the mapping.
    """
    offenses_by_file: Mapping[str, Tuple[OffenseRecord, ...]] = field(default_factory=dict)
    metadata: Mapping[str, Any] = field(default_factory=dict)
    summary: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'offenses_by_file', MappingProxyType(dict(self.offenses_by_file)))
        object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))
        object.__setattr__(self, 'summary', MappingProxyType(dict(self.summary)))

    def file_offenses(self, path: Union[str, os.PathLike]) -> Tuple[OffenseRecord, ...]:
        """Offenses for a file, or an empty tuple if it had none."""
        return self.offenses_by_file.get(_normalize_path(path), ())

    @property
    def paths(self) -> List[str]:
        return sorted(self.offenses_by_file)

    @property
    def offense_count(self) -> int:
        return sum(len(offenses) for offenses in self.offenses_by_file.values())

    @property
    def corrected_count(self) -> int:
        return sum(1 for offense in self.offenses() if offense.corrected)

    def offenses(self) -> List[OffenseRecord]:
        """All offenses, grouped by file in path order."""
        return [offense for path in self.paths for offense in self.offenses_by_file[path]]

    def counts_by_cop(self) -> Dict[str, int]:
        counts = Counter(offense.cop_name for offense in self.offenses())
        return dict(counts.most_common())

    def counts_by_severity(self) -> Dict[str, int]:
        counts = Counter(offense.severity for offense in self.offenses())
        return dict(counts.most_common())

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serialisable view of the run."""
        return {
            'metadata': dict(self.metadata),
            'summary': {
                'offense_count': self.offense_count,
                'corrected_count': self.corrected_count,
                'offending_file_count': len(self.offenses_by_file),
                'cop_distribution': self.counts_by_cop(),
                'severity_distribution': self.counts_by_severity(),
                **{key: value for key, value in self.summary.items() if key != 'offense_count'},
            },
            'files': [
                {
                    'path': path,
                    'offenses': [offense.to_dict() for offense in self.offenses_by_file[path]],
                }
                for path in self.paths
            ],
        }


class ResultAggregator:
    """Builds RunResult objects from linter JSON output."""

    def parse(self, payload: Union[str, bytes, Mapping[str, Any]]) -> RunResult:
        """
        Parse a JSON report.

        Args:
            payload: Raw JSON text or an already decoded document

        Returns:
            RunResult holding only the files that have offenses

        Raises:
            ExecutionError: If the payload isn't a usable report
        """
        if isinstance(payload, (str, bytes)):
            try:
                document = json.loads(payload)
            except ValueError as e:
                raise ExecutionError(f"Could not parse linter output as JSON: {e}") from e
        else:
            document = payload

        if not isinstance(document, Mapping) or not isinstance(document.get('files'), list):
            raise ExecutionError("Linter output has no list of files")

        offenses_by_file: Dict[str, Tuple[OffenseRecord, ...]] = {}
        for index, entry in enumerate(document['files']):
            if not isinstance(entry, Mapping) or not isinstance(entry.get('path'), str):
                raise ExecutionError(f"Linter output file entry {index} has no path")
            offenses = entry.get('offenses', [])
            if not isinstance(offenses, list):
                raise ExecutionError(f"Linter output for {entry['path']} has no list of offenses")
            if not offenses:
                continue

            try:
                records = tuple(OffenseRecord.from_dict(offense) for offense in offenses)
            except (KeyError, TypeError, ValueError) as e:
                raise ExecutionError(f"Malformed offense in linter output for {entry['path']}: {e}") from e
            offenses_by_file[_normalize_path(entry['path'])] = records

        metadata = document.get('metadata') or {}
        summary = document.get('summary') or {}
        if not isinstance(metadata, Mapping) or not isinstance(summary, Mapping):
            raise ExecutionError("Linter output metadata and summary must be objects")

        logger.debug(f"Parsed {len(offenses_by_file)} file(s) with offenses")
        return RunResult(offenses_by_file=offenses_by_file, metadata=metadata, summary=summary)

    def lookup(self, result: RunResult, path: Union[str, os.PathLike]) -> Tuple[OffenseRecord, ...]:
        """Offenses recorded for a path; empty when the path is absent."""
        return result.file_offenses(path)
