# locator_resolver/selectors/loader.py
from __future__ import annotations

"""YAML selector definitions
----------------------------
Project-specific query kinds declared in YAML instead of code:

    selectors:
      - name: test_id
        inherit: xpath
        xpath: ".//*[@data-testid = {locator}]"
        match: "^testid:(?P<locator>.+)$"
        failure_message: "no element with data-testid '{locator}' found"

`{locator}` in an xpath template becomes an XPath string literal; in a css
template or failure message it is the raw text. When `match` has a group
named `locator`, an auto-detected locator is reduced to that group.
"""

import os
import re
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from locator_resolver.selectors.definition import SelectorBuilder, SelectorDefinition
from locator_resolver.selectors.errors import SelectorConfigError
from locator_resolver.selectors.filters import NAMED_FILTERS
from locator_resolver.selectors.registry import SelectorRegistry
from locator_resolver.utils.logger import get_logger, log_with_context
from locator_resolver.xpath import XPathUnion, css, literal, text_of

log = get_logger(__name__)

_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


# ---------- Schema ----------


class SelectorSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Registry key")
    inherit: Optional[str] = Field(default=None, description="Parent selector to copy behavior from")
    xpath: Optional[Union[str, List[str]]] = Field(default=None, description="XPath template(s)")
    css: Optional[str] = Field(default=None, description="CSS template")
    match: Optional[str] = Field(default=None, description="Regex enabling auto-detection for string locators")
    failure_message: Optional[str] = None
    filters: List[str] = Field(default_factory=list, description="Names of built-in filters")

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("match")
    @classmethod
    def _match_compiles(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"invalid match pattern: {e}") from e
        return v

    @field_validator("filters")
    @classmethod
    def _known_filters(cls, v: List[str]) -> List[str]:
        unknown = [n for n in v if n not in NAMED_FILTERS]
        if unknown:
            raise ValueError(f"unknown filter(s) {unknown}; expected any of {sorted(NAMED_FILTERS)}")
        return v

    @model_validator(mode="after")
    def _one_template(self) -> "SelectorSpec":
        if self.xpath is not None and self.css is not None:
            raise ValueError("give either 'xpath' or 'css', not both")
        if self.xpath is None and self.css is None and self.inherit is None:
            raise ValueError("a selector without 'inherit' needs an 'xpath' or 'css' template")
        return self

    # ---------- Conversion ----------

    def _unwrap(self) -> Callable[[Any], Any]:
        pattern = re.compile(self.match) if self.match else None
        if pattern is None or "locator" not in pattern.groupindex:
            return lambda locator: locator

        def unwrap(locator: Any) -> Any:
            if isinstance(locator, str):
                m = pattern.search(locator)
                if m:
                    return m.group("locator")
            return locator

        return unwrap

    def _xpath_builder(self):
        unwrap = self._unwrap()
        if self.css is not None:
            template = self.css
            return lambda locator, options: css(template.replace("{locator}", text_of(unwrap(locator))))
        if self.xpath is None:
            return None
        templates = [self.xpath] if isinstance(self.xpath, str) else list(self.xpath)

        def build(locator, options):
            lit = literal(unwrap(locator))
            return XPathUnion(*(t.replace("{locator}", lit) for t in templates))

        return build

    def to_builder(self, registry: SelectorRegistry) -> SelectorBuilder:
        builder = registry.define(self.name)
        if self.inherit:
            builder.inherit_from(self.inherit)

        xpath = self._xpath_builder()
        if xpath is not None:
            builder.xpath(xpath)

        if self.match:
            pattern = re.compile(self.match)
            builder.match(lambda locator: isinstance(locator, str) and pattern.search(locator) is not None)

        if self.failure_message is not None:
            template = self.failure_message
            unwrap = self._unwrap()
            builder.failure_message(
                lambda node, locator: template.replace("{locator}", text_of(unwrap(locator)))
            )

        for filter_name in self.filters:
            predicate, keys = NAMED_FILTERS[filter_name]
            builder.filter(predicate, *keys)
        return builder


# ---------- Helpers ----------


def _subst_env(obj):
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(0)), obj)
    if isinstance(obj, list):
        return [_subst_env(x) for x in obj]
    if isinstance(obj, dict):
        return {k: _subst_env(v) for k, v in obj.items()}
    return obj


def _invalid(path: Path, idx: int, ve: ValidationError) -> SelectorConfigError:
    lines = [f"Invalid selector definition in '{path}' (document {idx}):"]
    for e in ve.errors():
        loc = ".".join(str(p) for p in e.get("loc", []))
        msg = e.get("msg", "invalid value")
        lines.append(f"  - {loc}: {msg}")
    return SelectorConfigError("\n".join(lines))


# ---------- Public API ----------


def load_selectors_file(path: Path | str) -> list[SelectorSpec]:
    """Load selector specs from a YAML file (supports multi-document)."""
    sel_path = Path(path)
    if not sel_path.exists():
        raise FileNotFoundError(f"Selectors file not found: {sel_path}")
    try:
        docs = list(yaml.safe_load_all(sel_path.read_text(encoding="utf-8")))
    except yaml.YAMLError as ye:
        raise SelectorConfigError(f"YAML parse error in {sel_path}: {ye}") from ye

    out: list[SelectorSpec] = []
    for idx, data in enumerate(docs, start=1):
        if data is None:
            continue
        if not isinstance(data, dict):
            raise SelectorConfigError(f"Document {idx} in {sel_path} must be a mapping/object.")
        entries = data["selectors"] if "selectors" in data else [data]
        if not isinstance(entries, list):
            raise SelectorConfigError(f"'selectors' in document {idx} of {sel_path} must be a list.")
        for entry in entries:
            try:
                out.append(SelectorSpec.model_validate(_subst_env(entry)))
            except ValidationError as ve:
                raise _invalid(sel_path, idx, ve) from ve

    if not out:
        raise SelectorConfigError(f"No selector definitions found in {sel_path}")
    return out


def register_selectors(
    registry: SelectorRegistry,
    specs: list[SelectorSpec],
    *,
    source: Optional[str | Path] = None,
) -> list[SelectorDefinition]:
    """
    Build and register specs in order, so later entries may inherit from earlier ones.
    `source` (usually the YAML path) is attached to the log records.
    """
    file_log = log_with_context(log, source=str(source)) if source is not None else log
    registered: list[SelectorDefinition] = []
    for spec in specs:
        scoped = log_with_context(file_log, selector=spec.name)
        registered.append(spec.to_builder(registry).register())
        scoped.debug(f"Registered selector '{spec.name}'" + (f" (inherits {spec.inherit})" if spec.inherit else ""))
    return registered


__all__ = [
    "SelectorSpec",
    "load_selectors_file",
    "register_selectors",
]
