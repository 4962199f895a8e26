"""Launcher for `python -m composer`: opens the demo home page."""

from __future__ import annotations

import sys

from composer import settings
from composer.app.bootstrap import create_app
from composer.demo.home_page import HomePage


def main() -> int:  # pragma: no cover - runtime
    ctx = create_app(headless=False)
    page_context = ctx.page_context(title="** Title **", name="Qt", count=0)
    page = HomePage(ctx.composer, settings.APP_TITLE, context=page_context)
    page.show()
    return ctx.qt_app.exec()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
