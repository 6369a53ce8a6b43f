"""
Reading and writing of the ``.model`` / ``.vocab`` file pair.

Layout of a ``.model`` file::

    StrEnc <version>
    type <kind>
    params <json object>
    ---
    <number of entries>
    <json encoded token> <id>
    ...
    ---

Tokens are JSON encoded so that whitespace and newlines inside a token
survive the line-oriented format.
"""

import json
import logging
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Final

from ._sanitise import render_token
from .errors import ModelLoadError
from .types import Mapping

PREFIX: Final[str] = "StrEnc"
try:
    _version = version("strenc")
except PackageNotFoundError:
    _version = "dev"

VERSION: Final[str] = _version
MODEL_SUFFIX: Final[str] = ".model"
VOCAB_SUFFIX: Final[str] = ".vocab"
MARKER: Final[str] = "---"

log = logging.getLogger(__name__)


@dataclass
class ModelFile:
    """Contents of one persisted model."""

    kind: str
    mapping: Mapping
    params: dict[str, Any] = field(default_factory=dict)


def _check_model_path(model_filename: str | Path) -> Path:
    path = Path(model_filename)

    if not path.exists():
        raise ModelLoadError("model filepath does not exist", model_path=str(path))

    if path.suffix != MODEL_SUFFIX:
        raise ModelLoadError("expected .model file", model_path=str(path))

    return path


def read_kind(model_filename: str | Path) -> str:
    """Read only the model kind from the file header."""
    path = _check_model_path(model_filename)

    with path.open("r", encoding="utf-8") as f:
        # skip version to get model kind
        _ = f.readline()

        kind = f.readline().strip()
        if kind.startswith("type "):
            return kind[5:]

        raise ModelLoadError(f"expected model type got {kind}", model_path=str(path))


def write_model(file_prefix: str | Path, model: ModelFile) -> Path:
    """
    Persist ``model`` as ``<file_prefix>.model`` plus ``<file_prefix>.vocab``.

    :return: Path of the written ``.model`` file.
    """
    model_path = Path(file_prefix).with_suffix(MODEL_SUFFIX)
    # create directory if does not exist
    model_path.parent.mkdir(parents=True, exist_ok=True)

    log.debug(f"saving {len(model.mapping)} dictionary entries to {model_path}")

    with model_path.open("w", encoding="utf-8", newline="\n") as f:
        # header: version, model kind, policy parameters
        f.write(f"{PREFIX} {VERSION}\n")
        f.write(f"type {model.kind}\n")
        f.write(f"params {json.dumps(model.params, sort_keys=True)}\n")
        f.write(f"{MARKER}\n")
        f.write(f"{len(model.mapping)}\n")
        for token, token_id in model.mapping.items():
            f.write(f"{json.dumps(token)} {token_id}\n")
        f.write(f"{MARKER}\n")

    vocab_path = model_path.with_suffix(VOCAB_SUFFIX)
    with vocab_path.open("w", encoding="utf-8", newline="\n") as f:
        for token, token_id in model.mapping.items():
            f.write(f"[{token_id}] {render_token(token)}\n")

    return model_path


def read_model(model_filename: str | Path) -> ModelFile:
    """
    Load a ``.model`` file written by ``write_model``.

    :raises ModelLoadError: If the file does not exist, has the wrong suffix,
                            was written by another version, or is malformed.
    """
    path = _check_model_path(model_filename)

    log.debug(f"reading model file {path}")

    with path.open("r", encoding="utf-8") as f:
        # verify version match
        header = f.readline().strip().split(" ")
        if len(header) != 2 or header[0] != PREFIX:
            raise ModelLoadError("not a strenc model file", model_path=str(path))
        if header[1] != VERSION:
            raise ModelLoadError(
                "model version mismatch",
                model_path=str(path),
                version_mismatch=(header[1], VERSION),
            )

        kind = f.readline().strip()
        if not kind.startswith("type "):
            raise ModelLoadError(f"expected model type got {kind}", model_path=str(path))
        kind = kind[5:]

        params_line = f.readline().strip()
        if not params_line.startswith("params "):
            raise ModelLoadError(
                f"expected policy parameters got {params_line}", model_path=str(path)
            )
        try:
            params = json.loads(params_line[7:])
        except json.JSONDecodeError as e:
            raise ModelLoadError("invalid policy parameters", model_path=str(path)) from e

        start_marker = f.readline().strip()
        if start_marker != MARKER:
            raise ModelLoadError(
                f"start sequence marker missing: (expected {MARKER}) (got {start_marker})",
                model_path=str(path),
            )

        n_entries = f.readline().strip()
        try:
            n_entries = int(n_entries)
            if n_entries < 0:
                raise ValueError()
        except ValueError:
            raise ModelLoadError(f"invalid entry count: {n_entries}", model_path=str(path))

        mapping: Mapping = {}
        for _ in range(n_entries):
            # split from the right as the encoded token might contain whitespace
            entry = f.readline().rstrip("\n").rsplit(maxsplit=1)
            if len(entry) != 2:
                raise ModelLoadError(
                    f"dictionary entry must be delimited by a whitespace: {entry}",
                    model_path=str(path),
                )
            try:
                token = json.loads(entry[0])
                token_id = int(entry[1])
            except (json.JSONDecodeError, ValueError):
                raise ModelLoadError(
                    f"invalid dictionary entry: {entry}", model_path=str(path)
                )
            if not isinstance(token, str):
                raise ModelLoadError(
                    f"dictionary token is not a string: {entry[0]}", model_path=str(path)
                )
            mapping[token] = token_id

        end_marker = f.readline().strip()
        if end_marker != MARKER:
            raise ModelLoadError(
                f"end sequence marker missing: (expected {MARKER}) (got {end_marker})",
                model_path=str(path),
            )

    log.debug(f"loaded {len(mapping)} dictionary entries of kind {kind}")
    return ModelFile(kind=kind, mapping=mapping, params=params)
