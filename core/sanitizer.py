"""Normalize the raw document before it is indexed"""

from typing import Union

from bs4 import BeautifulSoup

NBSP_ENTITY = "&nbsp;"
NBSP_CHAR = "\u00a0"


def sanitize_document(raw: Union[str, bytes]) -> str:
    """
    Keep the body markup and turn non-breaking spaces into plain spaces

    Styles and structure inside the body are left alone. Documents without
    a <body> are returned whole.
    """
    if not raw:
        return ""

    soup = BeautifulSoup(raw, 'html.parser')
    if soup.body is not None:
        markup = soup.body.decode_contents()
    else:
        markup = soup.decode()

    return markup.replace(NBSP_ENTITY, " ").replace(NBSP_CHAR, " ")
