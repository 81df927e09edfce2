"""
Resume template registry - the fixed catalogue of visual templates and the
user-facing customization schema layered on top of them
"""
from dataclasses import dataclass
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError

from app.models.enums import HeaderRule, HeadingDecoration, LayoutKind
from app.models.resume import SectionName, SegmentedResume
from app.utils.exceptions import (
    InvalidCustomizationKeyError,
    InvalidCustomizationValueError,
    UnknownTemplateError,
)


@dataclass(frozen=True)
class ColorScheme:
    primary: str
    secondary: str
    accent: str
    text: str
    muted: str

    def to_dict(self) -> dict:
        return {
            'primary': self.primary,
            'secondary': self.secondary,
            'accent': self.accent,
            'text': self.text,
            'muted': self.muted,
        }


@dataclass(frozen=True)
class Template:
    id: str
    display_name: str
    description: str
    layout: LayoutKind
    colors: ColorScheme
    font_family: str
    default_spacing: str
    heading_decoration: HeadingDecoration
    header_rule: HeaderRule = HeaderRule.NONE
    heading_color_role: str = "primary"

    def heading_color(self, colors: ColorScheme) -> str:
        return colors.secondary if self.heading_color_role == "secondary" else colors.primary

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.display_name,
            'description': self.description,
            'layout': self.layout.value,
            'colors': self.colors.to_dict(),
            'fontFamily': self.font_family,
            'spacing': self.default_spacing,
            'headingDecoration': self.heading_decoration.value,
        }


# ========================================
# Palettes and fonts
# ========================================
COLOR_SCHEMES: Dict[str, ColorScheme] = {
    'blue': ColorScheme('#1e3a5f', '#2c5282', '#3182ce', '#1a202c', '#4a5568'),
    'teal': ColorScheme('#0d9488', '#115e59', '#14b8a6', '#1f2937', '#6b7280'),
    'gray': ColorScheme('#374151', '#4b5563', '#6b7280', '#111827', '#6b7280'),
    'black': ColorScheme('#000000', '#333333', '#666666', '#000000', '#666666'),
    'navy': ColorScheme('#0F172A', '#2563EB', '#3B82F6', '#0F172A', '#64748B'),
}

# id -> display font name used by word processors
FONT_FAMILIES: Dict[str, str] = {
    'arial': 'Arial',
    'calibri': 'Calibri',
    'georgia': 'Georgia',
    'times': 'Times New Roman',
}

SPACING_LINE_HEIGHT = {
    'compact': 14,
    'comfortable': 16,
}

_NAVY = ColorScheme('#0F172A', '#2563EB', '#3B82F6', '#0F172A', '#64748B')
_AZURE = ColorScheme('#2563EB', '#0F172A', '#EFF6FF', '#0F172A', '#64748B')

_TEMPLATES: List[Template] = [
    Template(
        id='classic',
        display_name='Classic Professional',
        description='Clean traditional layout with black text and simple section dividers',
        layout=LayoutKind.SINGLE_COLUMN,
        colors=COLOR_SCHEMES['black'],
        font_family='Arial',
        default_spacing='comfortable',
        heading_decoration=HeadingDecoration.UNDERLINE,
        header_rule=HeaderRule.FULL,
    ),
    Template(
        id='modern',
        display_name='Modern Minimal',
        description='Contemporary with teal accents and clean skill badges',
        layout=LayoutKind.SINGLE_COLUMN,
        colors=COLOR_SCHEMES['teal'],
        font_family='Calibri',
        default_spacing='comfortable',
        heading_decoration=HeadingDecoration.ACCENT_RULE,
        header_rule=HeaderRule.SHORT,
    ),
    Template(
        id='executive',
        display_name='Executive Bold',
        description='Strong headers with two-tone design and highlighted sections',
        layout=LayoutKind.HEADER_BAND,
        colors=COLOR_SCHEMES['blue'],
        font_family='Georgia',
        default_spacing='compact',
        heading_decoration=HeadingDecoration.SHADED,
    ),
    Template(
        id='tech',
        display_name='Tech Simple',
        description='Developer-focused with categorized skills and lots of white space',
        layout=LayoutKind.SINGLE_COLUMN,
        colors=ColorScheme('#374151', '#4b5563', '#0ea5e9', '#111827', '#6b7280'),
        font_family='Consolas',
        default_spacing='comfortable',
        heading_decoration=HeadingDecoration.PLAIN,
        header_rule=HeaderRule.FULL,
    ),
    Template(
        id='corporate-navy',
        display_name='Corporate Navy',
        description='Full-width navy header with white text, blue section headers',
        layout=LayoutKind.HEADER_BAND,
        colors=_NAVY,
        font_family='Arial',
        default_spacing='comfortable',
        heading_decoration=HeadingDecoration.UNDERLINE,
        heading_color_role='secondary',
    ),
    Template(
        id='azure-minimal',
        display_name='Azure Minimal',
        description='White header with large blue name, centered contact info',
        layout=LayoutKind.SINGLE_COLUMN,
        colors=_AZURE,
        font_family='Calibri',
        default_spacing='comfortable',
        heading_decoration=HeadingDecoration.SHADED,
    ),
    Template(
        id='sapphire-sidebar',
        display_name='Sapphire Sidebar',
        description='Navy left sidebar with contact and skills',
        layout=LayoutKind.SIDEBAR_LEFT,
        colors=_NAVY,
        font_family='Arial',
        default_spacing='compact',
        heading_decoration=HeadingDecoration.UNDERLINE,
        heading_color_role='secondary',
    ),
    Template(
        id='royal-rightrail',
        display_name='Royal Right-Rail',
        description='Light blue right sidebar with contact and skills',
        layout=LayoutKind.SIDEBAR_RIGHT,
        colors=_AZURE,
        font_family='Arial',
        default_spacing='compact',
        heading_decoration=HeadingDecoration.ACCENT_RULE,
    ),
]

_REGISTRY: Dict[str, Template] = {t.id: t for t in _TEMPLATES}


def list_templates() -> List[Template]:
    """All registered templates in catalogue order."""
    return list(_TEMPLATES)


def resolve_template(template_id: str) -> Template:
    """Return the template registered under *template_id*.

    Raises:
        UnknownTemplateError: if no template with that id exists.
    """
    try:
        return _REGISTRY[template_id]
    except (KeyError, TypeError):
        raise UnknownTemplateError(template_id, available=list(_REGISTRY)) from None


# ========================================
# Customization
# ========================================

class Customization(BaseModel):
    """User overrides applied on top of a template. Immutable once resolved."""
    model_config = ConfigDict(extra='forbid', frozen=True, populate_by_name=True)

    color_scheme: Optional[Literal['blue', 'teal', 'gray', 'black', 'navy']] = 'teal'
    font_family: Literal['arial', 'calibri', 'georgia', 'times'] = 'arial'
    spacing: Literal['compact', 'comfortable'] = 'comfortable'
    show_certifications: bool = True
    show_languages: bool = False
    show_volunteer: bool = False

    def palette(self, template: Template) -> ColorScheme:
        """Chosen colour scheme, or the template's own palette when it is set to None."""
        if self.color_scheme:
            return COLOR_SCHEMES[self.color_scheme]
        return template.colors

    @property
    def font_name(self) -> str:
        return FONT_FAMILIES[self.font_family]

    @property
    def line_height(self) -> int:
        return SPACING_LINE_HEIGHT[self.spacing]


# camelCase spellings sent by the web client
_KEY_ALIASES = {
    'colorScheme': 'color_scheme',
    'colorSchemeId': 'color_scheme',
    'fontFamily': 'font_family',
    'fontFamilyId': 'font_family',
    'showCertifications': 'show_certifications',
    'showLanguages': 'show_languages',
    'showVolunteer': 'show_volunteer',
}

DEFAULT_CUSTOMIZATION = Customization()


def resolve_customization(partial: Optional[dict] = None, template: Optional[Template] = None) -> Customization:
    """Merge user overrides onto the documented defaults.

    When *template* is given and spacing is not overridden, the template's
    default spacing is used.

    Raises:
        InvalidCustomizationKeyError: an override key is not part of the schema,
            or two spellings of one option were both given.
        InvalidCustomizationValueError: a known key carries an unsupported value.
    """
    overrides = {}
    duplicates = []
    for key, value in (partial or {}).items():
        field = _KEY_ALIASES.get(key, key)
        if field in overrides:
            duplicates.append(key)
            continue
        overrides[field] = value
    if duplicates:
        raise InvalidCustomizationKeyError(
            duplicates,
            details={'reason': 'duplicate'},
            message=f"Customization option(s) given more than once: {', '.join(duplicates)}",
        )

    if template is not None and 'spacing' not in overrides:
        overrides['spacing'] = template.default_spacing

    try:
        return Customization.model_validate(overrides)
    except PydanticValidationError as e:
        unknown = [
            '.'.join(str(x) for x in err.get('loc', ()))
            for err in e.errors()
            if err.get('type') == 'extra_forbidden'
        ]
        if unknown:
            raise InvalidCustomizationKeyError(unknown) from None
        errors = [
            f"{'.'.join(str(x) for x in err.get('loc', ()))}: {err.get('msg', 'invalid value')}"
            for err in e.errors()
        ]
        raise InvalidCustomizationValueError(errors) from None


def visible_sections(segmented: SegmentedResume, customization: Customization):
    """Non-empty sections in canonical order, honouring the show toggles."""
    for name, lines in segmented.non_empty_sections():
        if name is SectionName.CERTIFICATIONS and not customization.show_certifications:
            continue
        yield name, lines
