"""
Demonstration page for ``GET /example``.

The page loads ``captcha.js`` with the real site key. The copy-paste usage
snippet shown underneath is rendered with a placeholder instead, so the
operational key never appears in the visible sample.
"""

from __future__ import annotations

from urllib.parse import quote

from services.script_generator import DEFAULT_TEMPLATE_DIR, build_template_env

EXAMPLE_CONTAINER_ID = "captcha-example"
EXAMPLE_SUCCESS_CALLBACK = "function(token){console.log('Token:',token);}"
SITE_KEY_PLACEHOLDER = "<SITE-KEY>"

# Characters JavaScript's encodeURI leaves alone, besides letters and digits
_ENCODE_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"
# Kept readable in the query string of the sample callback
_QUERY_SAFE = "(){}:;,'"


def build_script_src(site_key_param: str) -> str:
    """Relative ``captcha.js`` URL; ``site_key_param`` is inserted as given."""
    container = quote(EXAMPLE_CONTAINER_ID, safe="")
    callback = quote(EXAMPLE_SUCCESS_CALLBACK, safe=_QUERY_SAFE)
    return (
        f"captcha.js?siteKey={site_key_param}"
        f"&containerId={container}"
        f"&onSuccessCallback={callback}"
    )


def render_usage_snippet(site_key: str = SITE_KEY_PLACEHOLDER) -> str:
    return (
        "\n"
        f'  <script src="{build_script_src(site_key)}"></script>\n'
        "  <script>\n"
        "    initCaptcha();\n"
        "  </script>\n"
    )


def encode_uri(value: str) -> str:
    return quote(value, safe=_ENCODE_URI_SAFE)


class ExamplePageGenerator:
    def __init__(self, template_dir: str = DEFAULT_TEMPLATE_DIR) -> None:
        self._jinja = build_template_env(template_dir)

    def render(self, site_key: str) -> str:
        page = self._jinja.get_template("example.html").render(
            container_id=EXAMPLE_CONTAINER_ID,
            script_src=build_script_src(quote(site_key, safe="")),
        )
        return page + self._render_usage_script()

    def _render_usage_script(self) -> str:
        return self._jinja.get_template("usage_script.html").render(
            encoded_usage=encode_uri(render_usage_snippet(SITE_KEY_PLACEHOLDER)),
        )
