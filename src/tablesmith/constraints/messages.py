"""Message catalog for findings and field-constraint reasons.

Every finding carries two strings: a user-facing one in the configurator's
locale and a technical one in English for logs. Templates are keyed by rule id
(or ``<rule id>.<variant>`` where a rule has several wordings) and by
``bounds.*`` for field-constraint reasons.

Numeric parameters are rendered with :func:`tablesmith.units.format_mm`.
Parameters named ``material``, ``edge``, ``shape`` and ``profile_type`` also
expose a localized ``*_label`` companion to the templates.
"""

from __future__ import annotations

from typing import Any, Literal

from ..units import format_mm

Locale = Literal["pl", "en"]

SUPPORTED_LOCALES: tuple[Locale, ...] = ("pl", "en")
DEFAULT_LOCALE: Locale = "pl"

_LABELS: dict[str, dict[str, dict[str, str]]] = {
    "pl": {
        "material": {
            "sintered_stone": "spiek kwarcowy",
            "quartz": "kwarc",
            "marble": "marmur",
            "granite": "granit",
        },
        "edge": {
            "straight": "prosta",
            "beveled": "skośna (bevel)",
            "rounded": "zaokrąglona",
            "mitered": "ukosowana (miter 45°)",
        },
        "shape": {
            "rectangle": "prostokąt",
            "square": "kwadrat",
            "oval": "owal",
            "round": "okrąg",
            "custom": "niestandardowy",
        },
        "profile_type": {
            "round": "okrągły",
            "square": "kwadratowy",
            "rectangular": "prostokątny",
            "trestle": "kozłowy",
            "pedestal": "centralny/piedestał",
            "radial_halfcylinder": "półwalce promieniowe",
        },
    },
    "en": {
        "material": {
            "sintered_stone": "sintered stone",
            "quartz": "quartz",
            "marble": "marble",
            "granite": "granite",
        },
        "edge": {
            "straight": "straight",
            "beveled": "beveled",
            "rounded": "rounded",
            "mitered": "mitered (45°)",
        },
        "shape": {
            "rectangle": "rectangle",
            "square": "square",
            "oval": "oval",
            "round": "round",
            "custom": "custom",
        },
        "profile_type": {
            "round": "round",
            "square": "square",
            "rectangular": "rectangular",
            "trestle": "trestle",
            "pedestal": "pedestal",
            "radial_halfcylinder": "radial halfcylinder",
        },
    },
}

_TECH: dict[str, str] = {
    "MAT-01": "Material {material} requires min {min}mm thickness, got {thickness}mm.",
    "MAT-02": "{material} at length {length}mm (>{threshold}mm) requires {min}mm thickness, got {thickness}mm.",
    "SPAN-01": (
        "{material} at {thickness}mm has max span {max_span}mm (allowed {allowed}mm with "
        "construction multiplier {multiplier}), table length {length}mm exceeds it."
    ),
    "SPAN-02": "Pedestal leg: top span {span}mm exceeds max {max}mm for {thickness}mm {material}.",
    "STAB-01": "Stability ratio {ratio} < {min_ratio}. footprint={footprint}mm, height={total}mm. Min footprint: {min}mm.",
    "STAB-02": "Pedestal base {profile}mm < required {min}mm ({min_ratio} x {total}mm).",
    "STAB-03.metal": (
        "Metal leg h={leg_height}mm > {max_height}mm and profile {profile}mm < {min_profile}mm, foot base required."
    ),
    "STAB-03.wood": (
        "Wood leg h={leg_height}mm > {max_height}mm and profile {profile}mm < {min_profile}mm, foot base required."
    ),
    "LEG-01": "Metal {profile_type} leg min size {min}mm, got {profile}mm.",
    "LEG-02": "Wood leg h={leg_height}mm requires min profile {min}mm, got {profile}mm.",
    "LEG-03.metal": "Metal leg slenderness {slenderness} > max {max}. Euler buckling risk. Min profile: {min_profile}mm.",
    "LEG-03.wood": "Wood leg slenderness {slenderness} > max {max}. Buckling risk. Min profile: {min_profile}mm.",
    "LEG-04": "Pedestal leg (count=1 or profile=pedestal) invalid for {shape} top, only {allowed} allowed.",
    "LEG-05": "Round/oval top with {count} legs: ensure symmetric leg placement around centroid. Warning only.",
    "HGT-01.low": "totalHeight {total}mm below minimum {min}mm.",
    "HGT-01.high": "totalHeight {total}mm above maximum {max}mm.",
    "HGT-03": (
        "totalHeight {total}mm != legHeight {leg_height}mm + topThickness {thickness}mm = {expected}mm "
        "(diff={diff}mm, tolerance={tolerance}mm)."
    ),
    "EDGE.top": 'Edge finish "{edge}" requires min thickness {min}mm, got {thickness}mm (top).',
    "EDGE.face": 'Edge finish "{edge}" requires min thickness {min}mm, got {thickness}mm (face panel).',
    "COMP-01": "Composite face min thickness for {material} is {min}mm, got {face}mm.",
    "COMP-02": "Composite core {core}mm ({thickness} - 2x{face}) < min {min_core}mm.",
    "COMP-03": "Composite total {thickness}mm < required {min_total}mm (2x{face} + {min_core}).",
    "RADIAL-01": "Radial spread {spread}mm < required {min}mm ({ratio} x {total}mm). Tipping risk.",
    "RADIAL-02": "Radial halfcylinder count {count} < minimum {min}.",
    "RADIAL-03": "Radial halfcylinder diameter {profile}mm < min {min}mm.",
}

_USER: dict[str, dict[str, str]] = {
    "pl": {
        "MAT-01": (
            'Minimalna grubość blatu z materiału "{material_label}" wynosi {min} mm. '
            "Podana grubość {thickness} mm jest niewystarczająca."
        ),
        "MAT-02": (
            'Przy długości blatu {length} mm materiał "{material_label}" wymaga grubości co najmniej {min} mm '
            "(podano {thickness} mm). Przy dużej rozpiętości cieńszy blat jest podatny na ugięcie i pęknięcia."
        ),
        "SPAN-01": (
            'Przy grubości blatu {thickness} mm i materiale "{material_label}" maksymalna długość stołu '
            "wynosi {allowed} mm. Długość {length} mm przekracza ten limit. "
            "Zwiększ grubość blatu lub zmniejsz wymiary blatu."
        ),
        "SPAN-02": (
            "Pojedyncza noga centralna (piedestał) nie udźwignie blatu o rozpiętości {span} mm. "
            "Przy grubości {thickness} mm maksymalna rozpiętość wynosi {max} mm. "
            "Zwiększ grubość blatu lub zastosuj więcej nóg."
        ),
        "STAB-01": (
            "Stosunek rzutu poziomego ({footprint} mm) do całkowitej wysokości stołu ({total} mm) wynosi "
            "{ratio}, co jest poniżej progu {min_ratio}. Stół może być niestabilny. "
            "Minimalne rozpięcie przy tej wysokości to {min} mm."
        ),
        "STAB-02": (
            "Podstawa piedestału ma średnicę {profile} mm, ale przy wysokości stołu {total} mm minimalna "
            "średnica podstawy wynosi {min} mm ({percent}% wysokości). Stół może się przewrócić."
        ),
        "STAB-03.metal": (
            "Metalowa noga o wysokości {leg_height} mm i przekroju {profile} mm wymaga stopy stabilizującej. "
            "Nogi powyżej {max_height} mm z profilem poniżej {min_profile} mm są podatne na przewrócenie."
        ),
        "STAB-03.wood": (
            "Drewniana noga o wysokości {leg_height} mm i przekroju {profile} mm wymaga stopy stabilizującej. "
            "Nogi drewniane powyżej {max_height} mm z wymiarem poniżej {min_profile} mm są niestabilne bez stopy."
        ),
        "LEG-01": (
            'Metalowa noga z profilem "{profile_type_label}" musi mieć wymiar co najmniej {min} mm. '
            "Podano {profile} mm, przekrój nośny jest zbyt mały."
        ),
        "LEG-02": (
            "Drewniana noga o wysokości {leg_height} mm wymaga wymiaru przekroju co najmniej {min} mm "
            "(podano {profile} mm)."
        ),
        "LEG-03.metal": (
            "Smukłość nogi metalowej (λ = {slenderness}) przekracza dopuszczalne {max}. Noga może ulec "
            "wyboczeniu. Zwiększ przekrój do min. {min_profile} mm lub zmniejsz wysokość."
        ),
        "LEG-03.wood": (
            "Smukłość nogi drewnianej (λ = {slenderness}) przekracza dopuszczalne {max}. "
            "Ryzyko wyboczenia w drewnie. Zwiększ przekrój do min. {min_profile} mm."
        ),
        "LEG-04": (
            "Pojedyncza noga centralna (piedestał) jest dopuszczalna tylko dla blatów okrągłych lub "
            'kwadratowych. Blat o kształcie "{shape_label}" wymaga co najmniej 4 nóg.'
        ),
        "LEG-05": (
            "Przy blacie okrągłym lub owalnym z {count} nogami zadbaj o symetryczne rozmieszczenie nóg "
            "względem środka ciężkości. Nierówny rozstaw może powodować niestabilność."
        ),
        "HGT-01.low": (
            "Całkowita wysokość stołu {total} mm jest poniżej minimalnego dopuszczalnego limitu {min} mm."
        ),
        "HGT-01.high": (
            "Całkowita wysokość stołu {total} mm przekracza maksymalny dopuszczalny limit {max} mm "
            "(stoły barowe)."
        ),
        "HGT-03": (
            "Wysokość całkowita ({total} mm) nie zgadza się z sumą nogi ({leg_height} mm) i grubości blatu "
            "({thickness} mm) = {expected} mm. Różnica wynosi {diff} mm (tolerancja: ±{tolerance} mm)."
        ),
        "EDGE.top": (
            'Wykończenie krawędzi "{edge_label}" wymaga grubości blatu co najmniej {min} mm. '
            "Przy grubości {thickness} mm nie ma wystarczającego materiału do obróbki krawędzi."
        ),
        "EDGE.face": (
            'Wykończenie krawędzi "{edge_label}" wymaga grubości tafli co najmniej {min} mm. '
            "Przy grubości tafli {thickness} mm nie ma wystarczającego materiału do obróbki krawędzi."
        ),
        "COMP-01": (
            'Minimalna grubość tafli blatu kompozytowego z materiału "{material_label}" wynosi {min} mm. '
            "Podana grubość tafli {face} mm jest niewystarczająca."
        ),
        "COMP-02": (
            "Rdzeń blatu kompozytowego ({thickness} mm − 2×{face} mm = {core} mm) jest zbyt cienki. "
            "Minimalna grubość rdzenia wynosi {min_core} mm."
        ),
        "COMP-03": (
            "Całkowita grubość blatu kompozytowego ({thickness} mm) jest niewystarczająca. Przy grubości "
            "tafli {face} mm minimalna całkowita grubość to {min_total} mm (2×tafla + {min_core} mm rdzeń)."
        ),
        "RADIAL-01": (
            "Promień rozstawu półwalców ({spread} mm) jest za mały. Przy całkowitej wysokości stołu "
            "{total} mm wymagany minimalny promień to {min} mm ({percent}% wysokości)."
        ),
        "RADIAL-02": "Podstawa promieniowa wymaga co najmniej {min} półwalców. Podano {count}.",
        "RADIAL-03": (
            "Średnica każdego półwalca w podstawie promieniowej musi wynosić co najmniej {min} mm. "
            "Podano {profile} mm."
        ),
        "bounds.thickness.base": "Minimum produkcyjne",
        "bounds.thickness.composite": "Kompozyt: 2 × {face} mm tafle + {min_core} mm rdzeń = min. {min} mm",
        "bounds.thickness.material": "{material_label} wymaga min. {min} mm (wytrzymałość mechaniczna)",
        "bounds.thickness.span_upgrade": "{material_label} przy długości {length} mm wymaga min. {min} mm (ugięcie)",
        "bounds.thickness.span": (
            "{material_label} przy długości {length} mm wymaga min. {min} mm (reguła rozpiętości)"
        ),
        "bounds.thickness.edge": 'Wykończenie "{edge_label}" wymaga min. {min} mm grubości blatu',
        "bounds.face.base": "Minimum produkcyjne tafli",
        "bounds.face.material": "{material_label} w kompozycie: min. {min} mm grubości tafli",
        "bounds.face.edge": 'Wykończenie "{edge_label}" wymaga min. {min} mm tafli',
        "bounds.length.base": "Maksymalny wymiar produkcyjny",
        "bounds.length.span": "{material_label} {thickness} mm: max rozpiętość {max} mm{bonus}",
        "bounds.length.bonus": " (bonus kompozytu ×{multiplier})",
        "bounds.length.pedestal": "Piedestał przy grubości {thickness} mm: max rozpiętość {max} mm",
        "bounds.width.base": "Minimum produkcyjne",
        "bounds.width.stability": "Stateczność: min. {min} mm szerokości (≥ {percent}% wysokości {total} mm)",
        "bounds.height": "Ergonomia: od {min} mm (stół kawowy) do {max} mm (stół barowy)",
        "bounds.profile.base": "Minimum strukturalne",
        "bounds.profile.radial": "Półwalce promieniowe: min. {min} mm średnicy",
        "bounds.profile.metal": 'Metalowa noga "{profile_type_label}" wymaga min. {min} mm przekroju',
        "bounds.profile.wood": "Drewniana noga {leg_height} mm wymaga min. {min} mm przekroju",
        "bounds.profile.slenderness": "Smukłość λ ≤ {max}: min. {min} mm przy wysokości {leg_height} mm",
        "bounds.profile.pedestal": "Piedestał: min. {min} mm podstawy (≥ {percent}% wysokości {total} mm)",
        "bounds.spread.base": "Minimalne rozpięcie półwalców",
        "bounds.spread.stability": (
            "Stateczność: min. {min} mm promienia rozstawu (≥ {percent}% wysokości {total} mm)"
        ),
    },
    "en": {
        "MAT-01": (
            'The minimum top thickness for "{material_label}" is {min} mm. '
            "The given thickness of {thickness} mm is not enough."
        ),
        "MAT-02": (
            'At a top length of {length} mm, "{material_label}" needs at least {min} mm of thickness '
            "(got {thickness} mm). A thinner top over a long span is prone to sagging and cracking."
        ),
        "SPAN-01": (
            'At {thickness} mm, a "{material_label}" top can be at most {allowed} mm long. '
            "The length of {length} mm exceeds that. Increase the thickness or reduce the top size."
        ),
        "SPAN-02": (
            "A single central pedestal cannot carry a top spanning {span} mm. At {thickness} mm the "
            "maximum span is {max} mm. Increase the thickness or use more legs."
        ),
        "STAB-01": (
            "The footprint ({footprint} mm) to total height ({total} mm) ratio is {ratio}, below the "
            "{min_ratio} threshold. The table may tip over. The minimum footprint at this height is {min} mm."
        ),
        "STAB-02": (
            "The pedestal base is {profile} mm across, but at a table height of {total} mm it must be at "
            "least {min} mm ({percent}% of the height). The table may tip over."
        ),
        "STAB-03.metal": (
            "A metal leg {leg_height} mm tall with a {profile} mm profile needs a stabilizing foot. Legs over "
            "{max_height} mm with a profile under {min_profile} mm are prone to tipping."
        ),
        "STAB-03.wood": (
            "A wooden leg {leg_height} mm tall with a {profile} mm profile needs a stabilizing foot. Wooden "
            "legs over {max_height} mm with a profile under {min_profile} mm are unstable without one."
        ),
        "LEG-01": (
            'A metal leg with a "{profile_type_label}" profile must be at least {min} mm. '
            "Got {profile} mm, the load-bearing section is too small."
        ),
        "LEG-02": (
            "A wooden leg {leg_height} mm tall needs a profile of at least {min} mm (got {profile} mm)."
        ),
        "LEG-03.metal": (
            "The metal leg slenderness (λ = {slenderness}) exceeds the allowed {max}. The leg may buckle. "
            "Increase the profile to at least {min_profile} mm or reduce the height."
        ),
        "LEG-03.wood": (
            "The wooden leg slenderness (λ = {slenderness}) exceeds the allowed {max}. Risk of buckling. "
            "Increase the profile to at least {min_profile} mm."
        ),
        "LEG-04": (
            "A single central pedestal is only allowed for round or square tops. "
            'A "{shape_label}" top needs at least 4 legs.'
        ),
        "LEG-05": (
            "With a round or oval top on {count} legs, place the legs symmetrically around the centre "
            "of gravity. Uneven spacing can make the table unstable."
        ),
        "HGT-01.low": "The total table height of {total} mm is below the minimum of {min} mm.",
        "HGT-01.high": "The total table height of {total} mm exceeds the maximum of {max} mm (bar tables).",
        "HGT-03": (
            "The total height ({total} mm) does not match leg ({leg_height} mm) plus top thickness "
            "({thickness} mm) = {expected} mm. The difference is {diff} mm (tolerance: ±{tolerance} mm)."
        ),
        "EDGE.top": (
            'The "{edge_label}" edge finish needs a top at least {min} mm thick. '
            "At {thickness} mm there is not enough material to machine the edge."
        ),
        "EDGE.face": (
            'The "{edge_label}" edge finish needs a face panel at least {min} mm thick. '
            "At {thickness} mm there is not enough material to machine the edge."
        ),
        "COMP-01": (
            'The minimum face panel thickness of a composite "{material_label}" top is {min} mm. '
            "The given face thickness of {face} mm is not enough."
        ),
        "COMP-02": (
            "The composite core ({thickness} mm − 2×{face} mm = {core} mm) is too thin. "
            "The minimum core thickness is {min_core} mm."
        ),
        "COMP-03": (
            "The total composite thickness ({thickness} mm) is not enough. With {face} mm face panels "
            "the minimum total is {min_total} mm (2×face + {min_core} mm core)."
        ),
        "RADIAL-01": (
            "The halfcylinder spread radius ({spread} mm) is too small. At a total height of {total} mm "
            "the minimum radius is {min} mm ({percent}% of the height)."
        ),
        "RADIAL-02": "A radial base needs at least {min} halfcylinders. Got {count}.",
        "RADIAL-03": "Each halfcylinder of a radial base must be at least {min} mm in diameter. Got {profile} mm.",
        "bounds.thickness.base": "Production minimum",
        "bounds.thickness.composite": "Composite: 2 × {face} mm faces + {min_core} mm core = min. {min} mm",
        "bounds.thickness.material": "{material_label} needs at least {min} mm (mechanical strength)",
        "bounds.thickness.span_upgrade": "{material_label} at {length} mm length needs at least {min} mm (deflection)",
        "bounds.thickness.span": "{material_label} at {length} mm length needs at least {min} mm (span rule)",
        "bounds.thickness.edge": 'The "{edge_label}" finish needs a top at least {min} mm thick',
        "bounds.face.base": "Production minimum for face panels",
        "bounds.face.material": "{material_label} in a composite: faces at least {min} mm",
        "bounds.face.edge": 'The "{edge_label}" finish needs faces at least {min} mm thick',
        "bounds.length.base": "Maximum production size",
        "bounds.length.span": "{material_label} {thickness} mm: max span {max} mm{bonus}",
        "bounds.length.bonus": " (composite bonus ×{multiplier})",
        "bounds.length.pedestal": "Central support at {thickness} mm: max span {max} mm",
        "bounds.width.base": "Production minimum",
        "bounds.width.stability": "Stability: at least {min} mm wide (≥ {percent}% of the {total} mm height)",
        "bounds.height": "Ergonomics: from {min} mm (coffee table) to {max} mm (bar table)",
        "bounds.profile.base": "Structural minimum",
        "bounds.profile.radial": "Radial halfcylinders: at least {min} mm in diameter",
        "bounds.profile.metal": 'A metal "{profile_type_label}" leg needs at least {min} mm',
        "bounds.profile.wood": "A wooden leg {leg_height} mm tall needs at least {min} mm",
        "bounds.profile.slenderness": "Slenderness λ ≤ {max}: at least {min} mm at a height of {leg_height} mm",
        "bounds.profile.pedestal": "Pedestal: base at least {min} mm (≥ {percent}% of the {total} mm height)",
        "bounds.spread.base": "Minimum halfcylinder spread",
        "bounds.spread.stability": "Stability: spread radius at least {min} mm (≥ {percent}% of the {total} mm height)",
    },
}

_LABELLED_PARAMS = ("material", "edge", "shape", "profile_type")


def check_locale(locale: str) -> Locale:
    if locale not in SUPPORTED_LOCALES:
        raise ValueError(f"Unsupported locale {locale!r}; expected one of {', '.join(SUPPORTED_LOCALES)}")
    return locale  # type: ignore[return-value]


def label(kind: str, value: str, locale: Locale = DEFAULT_LOCALE) -> str:
    """Return the localized display label for an enumerated value."""
    return _LABELS[locale][kind].get(value, value)


def _format_params(locale: Locale, params: dict[str, Any]) -> dict[str, Any]:
    formatted: dict[str, Any] = {}
    for key, value in params.items():
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            formatted[key] = format_mm(value)
        else:
            formatted[key] = value
    for key in _LABELLED_PARAMS:
        if key in params and params[key] is not None:
            formatted[f"{key}_label"] = label(key, str(params[key]), locale)
    return formatted


def render(key: str, locale: Locale = DEFAULT_LOCALE, **params: Any) -> tuple[str, str]:
    """Render the (user-facing, technical) message pair for a catalog key.

    Raises:
        KeyError: If the key has no template
    """
    locale = check_locale(locale)
    user = _USER[locale][key]
    tech = _TECH.get(key, _USER["en"][key])
    user_params = _format_params(locale, params)
    tech_params = _format_params("en", params)
    return user.format(**user_params), tech.format(**tech_params)


def render_text(key: str, locale: Locale = DEFAULT_LOCALE, **params: Any) -> str:
    """Render only the user-facing text (field-constraint reasons)."""
    locale = check_locale(locale)
    return _USER[locale][key].format(**_format_params(locale, params))


def catalog_keys(locale: Locale = DEFAULT_LOCALE) -> frozenset[str]:
    return frozenset(_USER[locale])
