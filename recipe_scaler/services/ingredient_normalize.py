import re


def normalize_ingredient_name(name: str) -> str:
    """
    Normalize an ingredient name for keyword matching.

    Rules:
    - Lowercase
    - Punctuation to spaces ("all-purpose" -> "all purpose")
    - Whitespace collapse

    Descriptors are kept on purpose: "salted butter" must still contain "salt".
    """
    if not name:
        return ""

    s = name.lower()
    s = re.sub(r'[^\w\s]', ' ', s)
    return re.sub(r'\s+', ' ', s).strip()


def first_keyword_match(name: str, table):
    """
    Return the value of the first (keyword, value) pair whose keyword occurs
    in the normalized name, or None.
    """
    s = normalize_ingredient_name(name)
    if not s:
        return None

    for keyword, value in table:
        if keyword in s:
            return value
    return None
