from __future__ import annotations

import csv
import io
from typing import Iterable, Mapping, Sequence

from flask import send_file


def write_csv_response(*, rows: Iterable[Mapping[str, object]], fieldnames: Sequence[str], filename: str):
    """Serialize rows to a downloadable CSV response.

    Encoded as UTF-8 with BOM so spreadsheet tools pick the right charset.
    ``send_file`` quotes ``filename`` and adds an RFC 5987 ``filename*`` for
    non-ASCII names.
    """

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(fieldnames))
    writer.writeheader()
    for row in rows:
        writer.writerow(row)

    output = io.BytesIO(out.getvalue().encode("utf-8-sig"))
    return send_file(output, mimetype="text/csv", as_attachment=True, download_name=filename)
