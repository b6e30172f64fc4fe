"""Repository slug derivation.

Bitbucket Cloud derives the slug of a new repository server side and does not
document how. The create endpoint nevertheless needs the slug in its URL, so
we approximate it here. Bitbucket's implementation is based on Django's
``slugify``; this is NOT a reimplementation of it, only the subset of rules
found by trial and error:

* apostrophes disappear (double quotes are assumed to behave the same),
* anything else that is not alphanumeric or ``_`` turns into a dash,
* no consecutive dashes, no leading or trailing dash,
* lowercase.
"""

import re

_QUOTES = re.compile(r"['\"]")
_NON_WORD = re.compile(r"\W", re.ASCII)
_DASH_RUN = re.compile(r"--+")


def derive_slug(name: str) -> str:
    """Approximate the slug Bitbucket will give a repository called ``name``.

    An empty result is returned as is; Bitbucket rejects it on creation.
    """
    slug = _QUOTES.sub("", name)
    slug = _NON_WORD.sub("-", slug)
    slug = _DASH_RUN.sub("-", slug)
    slug = slug.removeprefix("-").removesuffix("-")
    return slug.lower()
