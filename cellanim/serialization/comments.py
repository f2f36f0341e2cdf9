"""
Comment stripping for editable JSON.

Hand-edited files may carry `// line` and `/* block */` comments. They are
removed before the text reaches the json parser; comment markers inside
string literals are left alone.
"""


def strip_comments(text: str) -> str:
    """
    Remove // and /* */ comments from JSON text.

    Newlines inside removed comments are kept so json error positions still
    point at the right line.
    """
    out = []
    i = 0
    length = len(text)
    in_string = False

    while i < length:
        char = text[i]

        if in_string:
            out.append(char)
            if char == '\\' and i + 1 < length:
                out.append(text[i + 1])
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
            out.append(char)
            i += 1
        elif text.startswith('//', i):
            end = text.find('\n', i)
            i = length if end == -1 else end
        elif text.startswith('/*', i):
            end = text.find('*/', i + 2)
            comment = text[i:] if end == -1 else text[i:end + 2]
            out.append('\n' * comment.count('\n'))
            i = length if end == -1 else end + 2
        else:
            out.append(char)
            i += 1

    return ''.join(out)
