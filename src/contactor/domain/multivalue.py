"""Parsing of comma-separated, optionally labeled multi-value strings."""

from contactor.domain.entities import LabeledValue


def parse_labeled_values(raw: str | None, default_label: str) -> list[LabeledValue]:
    """Parse "label:value,value,..." into LabeledValue entries.

    Tokens are split on "," and each token on its first ":" only, so
    "work:sip:1234" has label "work" and value "sip:1234". Tokens without a
    label get default_label. Order and duplicates are kept. An empty string
    yields a single empty entry under default_label.
    """
    out = []
    for token in (raw or "").split(","):
        label, sep, value = token.partition(":")
        if not sep:
            out.append(LabeledValue(label=default_label, value=token.strip()))
            continue
        label = label.strip() or default_label
        out.append(LabeledValue(label=label, value=value.strip()))
    return out
