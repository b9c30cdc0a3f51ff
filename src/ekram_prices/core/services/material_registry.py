"""
Material registry.

Resolves bot aliases to material keys, checks keys against the built-in and
custom catalogs, and registers new custom materials.
"""

import re
from collections.abc import Mapping

from ekram_prices.config import get_logger
from ekram_prices.core.catalog import BUILTIN_MATERIALS, MATERIAL_ALIASES
from ekram_prices.core.entities import CustomMaterial
from ekram_prices.core.exceptions import ValidationError
from ekram_prices.core.services.documents import CUSTOM_MATERIALS, DocumentRepository

logger = get_logger(__name__)

_INVALID_KEY_CHARS = re.compile(r"[^a-z0-9_]")


def normalize_key(raw: str) -> str:
    """Lowercase and replace every character outside [a-z0-9_] with "_"."""
    return _INVALID_KEY_CHARS.sub("_", raw.lower())


class MaterialRegistry:
    """
    Catalog of known materials.

    The custom catalog is read from the store on every lookup.
    """

    def __init__(
        self,
        documents: DocumentRepository,
        builtin: Mapping[str, str] = BUILTIN_MATERIALS,
        aliases: Mapping[str, str] = MATERIAL_ALIASES,
        default_icon: str = "📦",
        default_unit: str = "جنيه/طن",
    ):
        self._documents = documents
        self._builtin = builtin
        self._aliases = aliases
        self.default_icon = default_icon
        self.default_unit = default_unit

    @property
    def builtin(self) -> Mapping[str, str]:
        return self._builtin

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def resolve_alias(self, token: str) -> str:
        return self._aliases.get(token, token)

    async def custom_materials(self) -> dict[str, dict]:
        """Return the stored custom catalog as raw JSON objects."""
        value, _ = await self._documents.read(CUSTOM_MATERIALS)
        return value

    async def is_valid(self, key: str) -> bool:
        if key in self._builtin:
            return True
        return key in await self.custom_materials()

    async def display_name(self, key: str) -> str:
        """Built-in name, else custom name, else the key itself."""
        if key in self._builtin:
            return self._builtin[key]
        entry = (await self.custom_materials()).get(key)
        if isinstance(entry, dict) and entry.get("name"):
            return entry["name"]
        return key

    async def valid_keys(self) -> list[str]:
        custom = await self.custom_materials()
        return [*self._builtin, *(k for k in custom if k not in self._builtin)]

    async def add_material(
        self,
        key: str | None,
        name_ar: str | None,
        name_en: str | None = None,
        icon: str | None = None,
        unit: str | None = None,
    ) -> tuple[str, str]:
        """
        Register or overwrite a custom material.

        Returns:
            (normalized key, Arabic name)

        Raises:
            ValidationError: key or name_ar is empty.
        """
        if not key:
            raise ValidationError("key", "key and nameAr required", key)
        if not name_ar:
            raise ValidationError("nameAr", "key and nameAr required", name_ar)

        material_key = normalize_key(key)
        material = CustomMaterial(
            name=name_ar,
            name_en=name_en or material_key,
            icon=icon or self.default_icon,
            unit=unit or self.default_unit,
        )

        def merge(catalog: dict) -> tuple[dict, None]:
            updated = dict(catalog)
            updated[material_key] = material.model_dump(by_alias=True)
            return updated, None

        await self._documents.modify(CUSTOM_MATERIALS, merge)

        logger.info(
            "material_added",
            material=material_key,
            name=name_ar,
        )
        return material_key, name_ar
