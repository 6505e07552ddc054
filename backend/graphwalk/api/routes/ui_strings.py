"""UI Strings — serves the per-locale string table to the front-end."""

from fastapi import APIRouter

from graphwalk.core.domain_types import Locale
from graphwalk.core.language_strings import get_ui_strings

router = APIRouter(prefix="/api/v1/locales", tags=["locales"])


@router.get("/{locale}/strings")
async def get_strings(locale: Locale):
    return {"locale": locale.value, "strings": get_ui_strings(locale)}
