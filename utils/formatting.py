import pandas as pd

DATE_FMT = "%d/%m/%Y %H:%M"
DATE_FMT_SECONDS = "%d/%m/%Y %H:%M:%S"


def safe(x):
    return str(x) if x is not None else ""


def or_dash(x):
    text = safe(x).strip()
    return text if text else "-"


def fmt_datetime(value, *, seconds=False, empty=""):
    """Render a store timestamp as ``DD/MM/YYYY HH:MM[:SS]``.

    Missing values render as ``empty``; strings that do not parse are
    returned unchanged.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return empty
    try:
        if pd.isna(value):
            return empty
    except (TypeError, ValueError):
        pass
    ts = pd.to_datetime(value, errors="coerce")
    if ts is None or pd.isna(ts):
        return str(value)
    return ts.strftime(DATE_FMT_SECONDS if seconds else DATE_FMT)


def fmt_deadline(value):
    return fmt_datetime(value, empty="No Deadline")
