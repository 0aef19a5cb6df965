"""
Error Messages and Localization.

Error bodies are small HTML fragments. Their English text doubles as the
gettext message id, so a missing or broken catalog simply yields English.
"""

import gettext
import logging
from pathlib import Path
from typing import Sequence

from kb.config import settings

logger = logging.getLogger(__name__)


USAGE = """<html lang=en>
<title>Missing or unknown ‘action’ parameter</title>
<h1>Missing or unknown ‘action’ parameter</h1>
<p>The ‘action’ parameter must be present and must be one of
‘search’, ‘definitions’, ‘articles’, ‘gdpr’, ‘dpa’, ‘dpv’ or ‘status’.
"""

MISSING_WORDS = """<html lang=en>
<title>Missing ‘words’ parameter</title>
<h1>Missing ‘words’ parameter</h1>
<p>When the ‘action’ parameter is ‘search’ or ‘articles’,
the ‘words’ parameter is required.
"""

MISSING_TERM = """<html lang=en>
<title>Missing ‘term’ parameter</title>
<h1>Missing ‘term’ parameter</h1>
<p>When the ‘action’ parameter is ‘definitions’,
the ‘term’ parameter is required.
"""

MISSING_ARTICLE = """<html lang=en>
<title>Missing ‘article’ parameter</title>
<h1>Missing ‘article’ parameter</h1>
<p>When the ‘action’ parameter is ‘gdpr’,
the ‘article’ parameter is required.
"""

INVALID_ARTICLE = """<html lang=en>
<title>Invalid ‘article’ parameter</title>
<h1>Invalid ‘article’ parameter</h1>
<p>The ‘article’ parameter must be an article number, optionally
followed by a clause and a subclause, e.g., ‘30’, ‘30(1)’ or ‘30(1)(g)’.
"""

INVALID_WORDS = """<html lang=en>
<title>Invalid ‘words’ parameter</title>
<h1>Invalid ‘words’ parameter</h1>
<p>For the ‘articles’ action, the ‘words’ parameter must be a full-text
query, e.g., ‘consent’, ‘consent OR breach’ or ‘"data breach"’.
Use the ‘search’ action to look up plain words.
"""

NO_SUCH_ARTICLE = """<html lang=en>
<title>No such article</title>
<h1>No such article</h1>
<p>The requested article or clause does not exist.
"""

NO_SUCH_DPA = """<html lang=en>
<title>No such DPA</title>
<h1>No such DPA</h1>
<p>No Data Protection Agency exists for the selected country or with the given name.
"""

MISSING_DPV_TERM = """<html lang=en>
<title>Missing ‘term’ parameter</title>
<h1>Missing ‘term’ parameter</h1>
<p>When the ‘action’ parameter is ‘dpv’,
the ‘term’ parameter is required.
"""

NO_SUCH_DPV = """<html lang=en>
<title>No such DPV term</title>
<h1>No such DPV term</h1>
<p>No term with the given name exists in the DPV vocabulary.
"""

DATABASE = """<html lang=en>
<title>Server error: Database not available</title>
<h1>Server error: Database not available</h1>
<p>An error occurred when trying to open the database.
"""


def to_locale(tag: str) -> str:
    """Maps a language tag to a gettext locale name: 'fr-be' → 'fr_BE'."""
    parts = tag.split("-", 1)
    if len(parts) == 1:
        return parts[0].lower()
    return f"{parts[0].lower()}_{parts[1].upper()}"


class Localizer:
    """
    Looks up translated message texts in the client's preferred languages.

    Never raises: if the catalogs cannot be loaded, or a lookup fails,
    the untranslated text is returned.
    """

    def __init__(self, languages: Sequence[str], locale_dir: Path = None, domain: str = None):
        self.locale_dir = locale_dir or settings.LOCALE_DIR
        self.domain = domain or settings.TEXT_DOMAIN
        self.translations = self._load([to_locale(lang) for lang in languages])

    def _load(self, locales: Sequence[str]) -> gettext.NullTranslations:
        if not locales:
            return gettext.NullTranslations()
        try:
            return gettext.translation(
                self.domain,
                localedir=str(self.locale_dir),
                languages=list(locales),
                fallback=True,
            )
        except Exception as e:
            logger.warning(f"Could not load message catalogs from {self.locale_dir}: {e}")
            return gettext.NullTranslations()

    def localize(self, text: str) -> str:
        try:
            return self.translations.gettext(text)
        except Exception as e:
            logger.warning(f"Message lookup failed, using untranslated text: {e}")
            return text
