from __future__ import annotations

from dataclasses import dataclass

__all__ = [ 'DEFAULT_SECTIONS', 'SectionSpec', 'select_sections', ]


@dataclass(frozen=True)
class SectionSpec:
    title: str
    # Regular expression matched at the start of the register name, without
    # the 'reg'/'mm' prefix
    pattern: str


DEFAULT_SECTIONS: tuple[SectionSpec, ...] = (
    SectionSpec('PHY_MUX', 'PHY_MUX'),
    SectionSpec('HDMICHARCLOCK', 'HDMICHARCLK'),
    SectionSpec('HDMI', 'HDMI'),
    SectionSpec('DIO', 'DIO'),
    SectionSpec('DIG', 'DIG'),
    SectionSpec('DCCG', 'DCCG'),
    SectionSpec('HPO', 'HPO'),
    SectionSpec('SYMCLK', 'SYMCLK'),
    SectionSpec('PHY_SYMCLK', 'PHY[A-G]SYMCLK'),
    SectionSpec('VPG', 'VPG'),
    SectionSpec('DME', 'DME'),
    SectionSpec('AFMT', 'AFMT'),
    SectionSpec('DTBCLK', 'DTBCLK'),
    SectionSpec('OTG', 'OTG'),
    SectionSpec('DENTIST', 'DENTIST'),
)


def select_sections(titles: list[str] | None,
                    sections: tuple[SectionSpec, ...] = DEFAULT_SECTIONS) -> tuple[SectionSpec, ...]:
    """Filter sections by title, keeping the declared order.

    Raises KeyError for an unknown title.
    """
    if not titles:
        return sections

    known = {s.title for s in sections}
    for t in titles:
        if t not in known:
            raise KeyError(t)

    return tuple(s for s in sections if s.title in titles)
