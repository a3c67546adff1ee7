"""Bootstrap expressions submitted to the script engine.

Every template embeds the entry path through :func:`escape_single_quoted`;
rendering is the only way to build these expressions.
"""

from __future__ import annotations

_ESM_CHECK_TEMPLATE = """(async function checkIfEsm(main) {{
  const {{ resolveMainPath, shouldUseESMLoader }} = await import("{module_url}");
  const resolvedMain = resolveMainPath(main);
  const useESMLoader = shouldUseESMLoader(resolvedMain);
  return useESMLoader;
}})('{main}');"""

_CJS_LOAD_TEMPLATE = """(async function loadCjsModule(main) {{
  const Module = await import("{module_url}");
  Module.default._load(main, null, true);
}})('{main}');"""


def escape_single_quoted(text: str) -> str:
    r"""Escape *text* for use inside a single-quoted script string literal.

    Backslashes are doubled first and single quotes escaped second, so the
    backslashes added for quotes are not doubled again.

    Line terminators are left untouched; a path containing one still breaks
    the literal.

    >>> print(escape_single_quoted("C:\\path\\'quoted'"))
    C:\\path\\\'quoted\'
    """

    return text.replace("\\", "\\\\").replace("'", "\\'")


def render_esm_check(module_url: str, entry_path: str) -> str:
    return _ESM_CHECK_TEMPLATE.format(
        module_url=module_url,
        main=escape_single_quoted(entry_path),
    )


def render_cjs_load(module_url: str, entry_path: str) -> str:
    return _CJS_LOAD_TEMPLATE.format(
        module_url=module_url,
        main=escape_single_quoted(entry_path),
    )
