"""Schema-free CSV tokenizer.

The scan is deliberately permissive: a stray quote simply toggles quoting,
there is no error path, and ``\\r\\n``, ``\\r`` and ``\\n`` are all accepted as
row terminators within the same file. Field values are trimmed, quoted or not.
"""


def tokenize(text: str) -> list[list[str]]:
    rows: list[list[str]] = []
    row: list[str] = []
    field: list[str] = []
    inside_quotes = False

    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        next_char = text[i + 1] if i + 1 < length else ""

        if char == '"':
            if inside_quotes and next_char == '"':
                field.append('"')
                i += 1
            else:
                inside_quotes = not inside_quotes
        elif char == "," and not inside_quotes:
            row.append("".join(field).strip())
            field = []
        elif char in "\r\n" and not inside_quotes:
            row.append("".join(field).strip())
            rows.append(row)
            row = []
            field = []
            if char == "\r" and next_char == "\n":
                i += 1
        else:
            field.append(char)
        i += 1

    # No trailing newline
    if row or field:
        row.append("".join(field).strip())
        rows.append(row)

    return rows
