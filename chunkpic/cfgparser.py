"""Reading and validation of run configuration files (JSON or TOML)."""

from __future__ import annotations

import datetime
import json
import os
import tomllib
from typing import Any

MANDATORY_SECTIONS = ("application", "diagnostic", "parameter")
MANDATORY_PARAMETERS = ("Nx", "Ny", "Nz", "Cx", "Cy", "Cz", "delt", "delh")


class ConfigError(ValueError):
    """Raised when a configuration cannot be read or is invalid."""

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        self.problems = problems or []
        detail = "".join(f"\n  {p}" for p in self.problems)
        super().__init__(message + detail)


def _strip_json_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments outside of string literals."""
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
        elif ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end < 0 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end < 0:
                raise ConfigError("unterminated comment in JSON input")
            i = end + 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _from_toml(value: Any) -> Any:
    """Keep only the value kinds that have a JSON counterpart."""
    if isinstance(value, dict):
        return {key: _from_toml(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_from_toml(item) for item in value]
    if isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime.date, datetime.time)):
        return None
    return None


class CfgParser:
    """Hold a configuration with ``application``, ``diagnostic`` and ``parameter`` sections."""

    def __init__(self) -> None:
        self.root: dict[str, Any] = {}

    @property
    def application(self) -> Any:
        return self.root.get("application")

    @property
    def parameter(self) -> Any:
        return self.root.get("parameter")

    @property
    def diagnostic(self) -> Any:
        return self.root.get("diagnostic")

    def _param(self, key: str) -> Any:
        try:
            return self.root["parameter"][key]
        except (KeyError, TypeError) as exc:
            raise ConfigError(f"Configuration misses `{key}` parameter") from exc

    @property
    def nx(self) -> int:
        return int(self._param("Nx"))

    @property
    def ny(self) -> int:
        return int(self._param("Ny"))

    @property
    def nz(self) -> int:
        return int(self._param("Nz"))

    @property
    def cx(self) -> int:
        return int(self._param("Cx"))

    @property
    def cy(self) -> int:
        return int(self._param("Cy"))

    @property
    def cz(self) -> int:
        return int(self._param("Cz"))

    @property
    def delt(self) -> float:
        return float(self._param("delt"))

    @property
    def delx(self) -> float:
        return float(self._param("delh"))

    @property
    def dely(self) -> float:
        return float(self._param("delh"))

    @property
    def delz(self) -> float:
        return float(self._param("delh"))

    def parse_file(self, filename: str | os.PathLike) -> dict[str, Any]:
        """Read and validate a ``.json`` or ``.toml`` file; return the root."""
        path = os.fspath(filename)
        ext = os.path.splitext(path)[1]

        if ext == ".json":
            with open(path, encoding="utf-8") as stream:
                text = stream.read()
            try:
                obj = json.loads(_strip_json_comments(text))
            except json.JSONDecodeError as exc:
                raise ConfigError(f"Failed to parse `{path}`: {exc}") from exc
        elif ext == ".toml":
            with open(path, "rb") as stream:
                try:
                    obj = _from_toml(tomllib.load(stream))
                except tomllib.TOMLDecodeError as exc:
                    raise ConfigError(f"Failed to parse `{path}`: {exc}") from exc
        else:
            raise ConfigError(f"Unknown file extension `{ext}`")

        if not isinstance(obj, dict):
            raise ConfigError(f"Failed to parse `{path}`: top level is not an object")

        try:
            self.validate(obj)
        except ConfigError as exc:
            raise ConfigError(f"Failed to parse `{path}`", exc.problems) from exc

        self.root = obj
        return self.root

    def overwrite(self, obj: dict[str, Any]) -> None:
        """Replace the configuration with ``obj`` after validating it."""
        self.validate(obj)
        self.root = obj

    def validate(self, obj: dict[str, Any]) -> None:
        """Raise ConfigError listing every problem found in ``obj``.

        Ensures ``application`` holds an ``option`` section.
        """
        problems = self.check_mandatory_sections(obj)

        application = obj.get("application")
        if isinstance(application, dict) and application.get("option") is None:
            application["option"] = {}

        parameter = obj.get("parameter")
        if parameter is not None:
            problems += self.check_mandatory_parameters(parameter)
            problems += self.check_dimensions(parameter)

        if problems:
            raise ConfigError("Invalid configuration", problems)

    def check_mandatory_sections(self, obj: dict[str, Any]) -> list[str]:
        """Return a message for each missing section."""
        return [
            f"Configuration misses `{section}` section"
            for section in MANDATORY_SECTIONS
            if obj.get(section) is None
        ]

    def check_mandatory_parameters(self, parameter: dict[str, Any]) -> list[str]:
        """Return a message for each missing parameter."""
        return [
            f"Configuration misses `{key}` parameter"
            for key in MANDATORY_PARAMETERS
            if parameter.get(key) is None
        ]

    def check_dimensions(self, parameter: dict[str, Any]) -> list[str]:
        """Return messages if grid sizes are not divisible by chunk counts."""
        nx, ny, nz = (int(parameter.get(k, 1)) for k in ("Nx", "Ny", "Nz"))
        cx, cy, cz = (int(parameter.get(k, 1)) for k in ("Cx", "Cy", "Cz"))

        ok = all(c != 0 and n % c == 0 for n, c in ((nz, cz), (ny, cy), (nx, cx)))
        if ok:
            return []
        return [
            "Number of grid must be divisible by number of chunk",
            f"Nx, Ny, Nz = [{nx:4d}, {ny:4d}, {nz:4d}]",
            f"Cx, Cy, Cz = [{cx:4d}, {cy:4d}, {cz:4d}]",
        ]