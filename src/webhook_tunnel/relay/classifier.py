from webhook_tunnel.common.models import CommentFrame, DataFrame, Ignored, SSEFrame


DATA_PREFIX = "data: "
COMMENT_PREFIX = ":"


def classify_line(line: str) -> SSEFrame:
    """Classify one event stream line.

    Only ``data: `` lines and ``:`` comments are recognised. Everything else,
    including blank keep-alives and the ``event:``, ``id:`` and ``retry:``
    fields, is ignored. The data payload is passed through untouched.
    """
    if line.startswith(DATA_PREFIX):
        return DataFrame(payload=line[len(DATA_PREFIX):])
    if line.startswith(COMMENT_PREFIX):
        return CommentFrame(text=line[len(COMMENT_PREFIX):])
    return Ignored()
