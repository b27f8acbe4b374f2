# backend/vcnty/exporters.py
from io import BytesIO

import pandas as pd

from vcnty.importing.synonyms import TEMPLATE_HEADERS


def template_csv() -> bytes:
    """Header-only CSV the seller fills in."""
    return (",".join(TEMPLATE_HEADERS)).encode("utf-8")


def export_xlsx_styled(df: pd.DataFrame, sheet_name: str = "Items"):
    """
    Return XLSX bytes with:
      - bold header, freeze top row
      - auto column widths
      - numeric formatting for price / stock columns
    """
    bio = BytesIO()
    with pd.ExcelWriter(bio, engine="xlsxwriter") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
        wb = writer.book
        ws = writer.sheets[sheet_name]

        header_fmt = wb.add_format({"bold": True, "text_wrap": True, "bg_color": "#F5F5F5", "border": 1})
        for col_num, value in enumerate(df.columns.values):
            ws.write(0, col_num, value, header_fmt)
        ws.freeze_panes(1, 0)

        money_fmt = wb.add_format({"num_format": "#,##0.00"})
        qty_fmt = wb.add_format({"num_format": "#,##0"})
        for i, col in enumerate(df.columns):
            col_series = df[col].astype(str)
            max_len = max([len(str(col))] + [len(s) for s in col_series.head(200)])
            low = str(col).lower()
            fmt = money_fmt if low == "price" else qty_fmt if low == "stock_qty" else None
            ws.set_column(i, i, min(max_len + 2, 60), fmt)

    bio.seek(0)
    return bio.getvalue()


def template_xlsx() -> bytes:
    return export_xlsx_styled(pd.DataFrame(columns=TEMPLATE_HEADERS))


def errors_csv(errors: list[str]) -> bytes:
    """Import error log, one numbered line per message."""
    df = pd.DataFrame({"#": range(1, len(errors) + 1), "error": list(errors)})
    return df.to_csv(index=False).encode("utf-8")
