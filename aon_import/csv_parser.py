from typing import Dict, List


def _split_rows(text: str) -> List[List[str]]:
    """
    Scan delimited text into rows of raw cells.

    Double quotes toggle quoting, and a doubled quote inside a quoted field is
    a literal quote. Commas and line breaks only separate outside quotes.
    Blank lines produce no row and CRLF counts as a single terminator.
    """
    rows: List[List[str]] = []
    row: List[str] = []
    cur: List[str] = []
    in_quotes = False
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""
        if ch == '"':
            if in_quotes and nxt == '"':
                cur.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            row.append("".join(cur))
            cur = []
        elif ch in "\r\n" and not in_quotes:
            if cur or row:
                row.append("".join(cur))
                rows.append(row)
                row = []
                cur = []
            if ch == "\r" and nxt == "\n":
                i += 1
        else:
            cur.append(ch)
        i += 1

    if cur or row:
        row.append("".join(cur))
        rows.append(row)
    return rows


def parse_csv(text: str) -> List[Dict[str, str]]:
    """
    Parse CSV text into a list of dicts keyed by the header row.

    Args:
        text (str): Comma-separated text, first row is the header.

    Returns:
        List[Dict[str, str]]: One dict per data row. Values are trimmed, missing
                              columns become "" and columns past the header are dropped.

    Raises:
        TypeError: If `text` is not a string.
    """
    if not isinstance(text, str):
        raise TypeError("CSV input must be a string")

    rows = _split_rows(text)
    if not rows:
        return []

    header = [(h or "").strip() for h in rows[0]]
    keys = [h or f"field{c}" for c, h in enumerate(header)]

    records = []
    for cols in rows[1:]:
        records.append({
            key: cols[c].strip() if c < len(cols) else ""
            for c, key in enumerate(keys)
        })
    return records
