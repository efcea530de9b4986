# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import json
import logging
import os
import typing
from typing import Any

from gitlanes.qt import *

logger = logging.getLogger(__name__)


class PrefsFile:
    """
    Mixin for dataclasses that persist themselves as a flat JSON object.

    Supported field types are bool, int, str and enums (stored by value).
    Only values that differ from their defaults are written out; fields whose
    names start with an underscore are never persisted.

    Subclasses may override validate() to reject out-of-range values.
    """

    _filename = ""
    _parentDirOverride = ""

    def getParentDir(self) -> str:
        from gitlanes.settings import TEST_MODE
        if self._parentDirOverride:
            return self._parentDirOverride
        if TEST_MODE:
            return os.path.join(qTempDir(), "testmode-config")
        return QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppConfigLocation)

    def getPath(self) -> str:
        assert self._filename, "you must override _filename"
        parentDir = self.getParentDir()
        if not parentDir:
            return ""
        return os.path.join(parentDir, self._filename)

    @classmethod
    def persistentFields(cls) -> list[dataclasses.Field]:
        return [f for f in dataclasses.fields(cls) if not f.name.startswith("_")]

    def reset(self):
        for f in dataclasses.fields(self):
            setattr(self, f.name, f.default)

    def validate(self, key: str, value: Any):
        """ Raise ValueError if `value` isn't acceptable for field `key`. """

    def write(self) -> str:
        """
        Save non-default values. Returns the path of the file,
        or an empty string if there was nothing to save.
        """

        path = self.getPath()
        if not path:
            logger.warning("Couldn't get path for writing")
            return ""

        blob = {}
        for f in self.persistentFields():
            value = getattr(self, f.name)
            if value != f.default:
                blob[f.name] = self.encode(value)

        if not blob:
            if os.path.isfile(path):
                logger.debug(f"Back to defaults, deleting {path}")
                os.unlink(path)
            return ""

        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wt", encoding="utf-8") as jsonFile:
            json.dump(blob, jsonFile, indent="\t")

        logger.info(f"Wrote {path}")
        return path

    def load(self) -> bool:
        """
        Overlay the values saved in the JSON file onto this object.
        Bad values are skipped with a warning; they keep their current value.
        """

        path = self.getPath()
        if not path or not os.path.isfile(path):
            return False

        try:
            with open(path, "rt", encoding="utf-8") as jsonFile:
                blob = json.load(jsonFile)
        except ValueError as exc:
            logger.warning(f"{path}: {exc}")
            return False

        if not isinstance(blob, dict):
            logger.warning(f"{path}: expected a JSON object")
            return False

        known = {f.name for f in self.persistentFields()}
        hints = typing.get_type_hints(type(self))

        for key, raw in blob.items():
            if key not in known:
                logger.warning(f"{path}: dropping key: {key}")
                continue

            try:
                value = self.decode(raw, hints[key])
                self.validate(key, value)
            except ValueError as exc:
                logger.warning(f"{path}: {key}: {exc}")
                continue

            setattr(self, key, value)

        return True

    @staticmethod
    def encode(value: Any) -> Any:
        return value.value if isinstance(value, enum.Enum) else value

    @staticmethod
    def decode(raw: Any, fieldType: type) -> Any:
        if issubclass(fieldType, enum.Enum):
            return fieldType(raw)

        # Compare exact types: bool is a subclass of int
        if type(raw) is not fieldType:
            raise ValueError(f"expected {fieldType.__name__}, got {type(raw).__name__}")

        return raw
