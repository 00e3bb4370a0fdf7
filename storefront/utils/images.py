"""
Product image helpers
"""

import random
from typing import Dict, List, Optional
from urllib.parse import quote

PLACEHOLDER_BASES = [
    "https://placehold.co/600x400/A0D2DB/FFFFFF",
    "https://placehold.co/600x400/C3AED6/333333",
    "https://placehold.co/600x400/EBF8FF/333333",
    "https://placehold.co/600x400/678b91/FFFFFF",
    "https://placehold.co/600x400/a0d2d9/333333",
]

def placeholder_image(product_name: Optional[str] = None) -> Dict[str, str]:
    """
    Build a placeholder image entry for a product without pictures

    Args:
        product_name: Name rendered into the placeholder

    Returns:
        Image dict with url and alt
    """
    text = quote(product_name) if product_name else "Product%20Image"
    base = random.choice(PLACEHOLDER_BASES)
    return {
        "url": f"{base}.png?text={text}",
        "alt": product_name or "Placeholder Image",
    }

def images_from_urls(image_urls: List[str], product_name: str) -> List[Dict[str, str]]:
    """Keep the first non-blank URL, or fall back to a placeholder"""
    if image_urls and image_urls[0].strip():
        return [{"url": image_urls[0].strip(), "alt": product_name or "Product Image"}]
    return [placeholder_image(product_name)]
