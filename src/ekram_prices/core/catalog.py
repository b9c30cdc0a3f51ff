"""
Built-in feed material catalog and bot alias table.

Both tables are read-only for the lifetime of the process. Custom materials
live in the blob store and are handled by MaterialRegistry.
"""

from types import MappingProxyType

BUILTIN_MATERIALS = MappingProxyType(
    {
        "yellow_corn": "ذرة صفراء",
        "soybean_meal": "كسب فول الصويا",
        "wheat_bran": "ردة قمح",
        "barley": "شعير",
        "sunflower_meal": "كسب عباد الشمس",
        "cottonseed_meal": "كسب بذرة القطن",
        "gluten_feed": "جلوتين فيد",
        "molasses": "مولاس",
    }
)

# Short codes used by the Telegram bot
MATERIAL_ALIASES = MappingProxyType(
    {
        "corn": "yellow_corn",
        "soya": "soybean_meal",
        "soy": "soybean_meal",
        "bran": "wheat_bran",
        "sunflower": "sunflower_meal",
        "cotton": "cottonseed_meal",
        "gluten": "gluten_feed",
    }
)
