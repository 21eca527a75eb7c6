"""
Client script generation for ``GET /captcha.js``.

ScriptParams is rebuilt on every request from the query string, falling
back to configuration. Values reach the script through Jinja's ``tojson``
filter, so a parameter can only ever become a string literal. The success
callback is the one exception: it is JavaScript source and is embedded
verbatim inside parentheses. It must therefore be a self-contained
expression. Its brackets must balance outside strings and comments, and
it may not leave a string or comment open. Otherwise a value such as
``function(){}), evil: (1`` could close the parentheses and add members to
the defaults object.
"""

from __future__ import annotations

import os
import re
from typing import Mapping
from urllib.parse import urlsplit

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from config import CaptchaSettings
from errors import ValidationError

CONTAINER_ID_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")
CALLBACK_PREFIX = "onCaptchaSuccess_"

_QUERY_NAMES = {
    "site_key": "siteKey",
    "worker_url": "workerUrl",
    "container_id": "containerId",
    "on_success_callback": "onSuccessCallback",
}

DEFAULT_TEMPLATE_DIR = os.path.join(
    os.path.dirname(os.path.dirname(__file__)),
    "templates",
    "captcha",
)

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}
_QUOTES = {"'", '"', "`"}


def is_self_contained_expression(source: str) -> bool:
    """True if every bracket in ``source`` closes inside it.

    Brackets inside string literals and comments are ignored. An unterminated
    string or comment, a trailing line comment included, fails the check.
    Regex literals are not recognised, so one containing an unbalanced
    bracket is rejected.
    """
    stack: list[str] = []
    i, n = 0, len(source)
    while i < n:
        ch = source[i]
        if ch in _QUOTES:
            i += 1
            while i < n and source[i] != ch:
                i += 2 if source[i] == "\\" else 1
            if i >= n:
                return False
        elif source.startswith("//", i):
            end = source.find("\n", i)
            if end == -1:
                return False
            i = end
        elif source.startswith("/*", i):
            end = source.find("*/", i + 2)
            if end == -1:
                return False
            i = end + 1
        elif ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif ch in _CLOSERS:
            if not stack or stack.pop() != ch:
                return False
        i += 1
    return not stack


def build_template_env(template_dir: str = DEFAULT_TEMPLATE_DIR) -> Environment:
    return Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


class ScriptParams(BaseModel):
    """Values baked into the generated script as its defaults."""

    model_config = ConfigDict(frozen=True)

    site_key: str
    worker_url: str
    container_id: str
    on_success_callback: str = Field(min_length=1)

    @field_validator("container_id")
    @classmethod
    def _container_id_is_identifier_safe(cls, v: str) -> str:
        if not CONTAINER_ID_PATTERN.match(v):
            raise ValueError(
                "containerId must start with a letter and contain only "
                "letters, digits, '-' or '_'"
            )
        return v

    @field_validator("worker_url")
    @classmethod
    def _worker_url_is_absolute(cls, v: str) -> str:
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError("workerUrl must be an absolute http(s) URL")
        return v

    @field_validator("on_success_callback")
    @classmethod
    def _callback_is_self_contained(cls, v: str) -> str:
        if not is_self_contained_expression(v):
            raise ValueError(
                "onSuccessCallback must be a single expression with balanced "
                "brackets and no unterminated string or comment"
            )
        return v

    @property
    def callback_name(self) -> str:
        return f"{CALLBACK_PREFIX}{self.container_id}"

    @classmethod
    def from_query(
        cls,
        query: Mapping[str, str],
        settings: CaptchaSettings,
        origin: str,
    ) -> "ScriptParams":
        """Build params from ``siteKey``/``workerUrl``/``containerId``/``onSuccessCallback``.

        Missing or empty query values fall back to configuration; the
        verification URL defaults to ``<origin>/verify``.

        Raises:
            ValidationError: if a supplied value is not acceptable.
        """
        try:
            return cls(
                site_key=query.get("siteKey") or settings.site_key,
                worker_url=query.get("workerUrl") or f"{origin.rstrip('/')}/verify",
                container_id=query.get("containerId") or settings.default_container_id,
                on_success_callback=query.get("onSuccessCallback")
                or settings.default_success_callback,
            )
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = str(first["loc"][0]) if first.get("loc") else None
            raise ValidationError(
                f"Invalid {_QUERY_NAMES.get(field, field)}: {first['msg']}",
                field=field,
            ) from e


class ScriptGenerator:
    """Renders the client script; holds no per-request state."""

    def __init__(
        self,
        widget_script_url: str,
        template_dir: str = DEFAULT_TEMPLATE_DIR,
    ) -> None:
        self._widget_script_url = widget_script_url
        self._jinja = build_template_env(template_dir)

    def render(self, params: ScriptParams) -> str:
        template = self._jinja.get_template("captcha.js.j2")
        return template.render(
            widget_script_url=self._widget_script_url,
            site_key=params.site_key,
            worker_url=params.worker_url,
            container_id=params.container_id,
            on_success_callback=params.on_success_callback,
            callback_prefix=CALLBACK_PREFIX,
        )
