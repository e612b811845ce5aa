"""Category index with a default-category fallback for unknown ids."""

import logging
from typing import Dict
from typing import List
from typing import Sequence

from toolbox_website.models import Category

logger = logging.getLogger(__name__)

CATEGORIES: List[Category] = [
    Category(
        id="calculation",
        name="Calculation Tools",
        description="Financial, health, math and everyday calculators",
        icon="M9 7h6m0 10v-3m-3 3h.01M9 17h.01M9 14h.01M12 14h.01M15 11h.01M12 11h.01M9 11h.01M7 21h10a2 2 0 002-2V5a2 2 0 00-2-2H7a2 2 0 00-2 2v14a2 2 0 002 2z",
        gradient="from-blue-600 to-cyan-600",
    ),
    Category(
        id="converter",
        name="Unit Converters",
        description="Convert length, weight, energy, pressure and dozens of other units",
        icon="M8 7h12m0 0l-4-4m4 4l-4 4m0 6H4m0 0l4 4m-4-4l4-4",
        gradient="from-green-600 to-emerald-600",
    ),
    Category(
        id="image",
        name="Image Tools",
        description="Resize, crop and generate images in the browser",
        icon="M4 16l4.586-4.586a2 2 0 012.828 0L16 16m-2-2l1.586-1.586a2 2 0 012.828 0L20 14m-6-6h.01M6 20h12a2 2 0 002-2V6a2 2 0 00-2-2H6a2 2 0 00-2 2v12a2 2 0 002 2z",
        gradient="from-purple-600 to-pink-600",
    ),
    Category(
        id="pdf",
        name="PDF & Document Tools",
        description="Merge, split, compress and convert PDF documents",
        icon="M7 21h10a2 2 0 002-2V9.414a1 1 0 00-.293-.707l-5.414-5.414A1 1 0 0012.586 3H7a2 2 0 00-2 2v14a2 2 0 002 2z",
        gradient="from-red-500 to-orange-500",
    ),
    Category(
        id="text",
        name="Text & String Tools",
        description="Transform, clean up, sort and analyse text",
        icon="M4 6h16M4 12h16M4 18h7",
        gradient="from-indigo-500 to-purple-500",
    ),
    Category(
        id="downloader",
        name="Downloader Tools",
        description="Save videos, reels and photos from social platforms",
        icon="M4 16v1a3 3 0 003 3h10a3 3 0 003-3v-1m-4-4l-4 4m0 0l-4-4m4 4V4",
        gradient="from-pink-500 to-rose-500",
    ),
    Category(
        id="color",
        name="Color Tools",
        description="Pick, convert and combine colors",
        icon="M7 21a4 4 0 01-4-4V5a2 2 0 012-2h4a2 2 0 012 2v12a4 4 0 01-4 4zm0 0h12a2 2 0 002-2v-4a2 2 0 00-2-2h-2.343",
        gradient="from-yellow-500 to-orange-500",
    ),
    Category(
        id="developer",
        name="Developer Tools",
        description="Encoders, decoders, formatters and regular expression helpers",
        icon="M10 20l4-16m4 4l4 4-4 4M6 16l-4-4 4-4",
        gradient="from-slate-600 to-gray-700",
    ),
    Category(
        id="seo",
        name="SEO Tools",
        description="Keyword research and on-page optimisation helpers",
        icon="M21 21l-6-6m2-5a7 7 0 11-14 0 7 7 0 0114 0z",
        gradient="from-teal-500 to-blue-500",
    ),
    Category(
        id="writing",
        name="Writing Tools",
        description="Rewrite text and generate stylised fonts",
        icon="M15.232 5.232l3.536 3.536m-2.036-5.036a2.5 2.5 0 113.536 3.536L6.5 21.036H3v-3.572L16.732 3.732z",
        gradient="from-fuchsia-500 to-purple-600",
    ),
    Category(
        id="grammar-plagiarism",
        name="Grammar & Plagiarism Tools",
        description="Check grammar, spelling, originality and readability",
        icon="M9 12l2 2 4-4m6 2a9 9 0 11-18 0 9 9 0 0118 0z",
        gradient="from-emerald-500 to-teal-600",
    ),
    Category(
        id="writing-assistance",
        name="Writing Assistance Tools",
        description="Outline, summarise and polish your drafts",
        icon="M12 6.253v13m0-13C10.832 5.477 9.246 5 7.5 5S4.168 5.477 3 6.253v13C4.168 18.477 5.754 18 7.5 18s3.332.477 4.5 1.253",
        gradient="from-sky-500 to-indigo-500",
    ),
]


class CategoryIndex:
    """Read-only lookup over a fixed, ordered category list.

    ``by_id`` is total: an unknown id resolves to the first category in the
    list so that a mistyped category never breaks a page.
    """

    def __init__(self, categories: Sequence[Category]):
        if not categories:
            raise ValueError("CategoryIndex needs at least one category")
        self._categories = tuple(categories)
        self._by_id: Dict[str, Category] = {}
        for category in self._categories:
            self._by_id.setdefault(category.id, category)

    @property
    def default(self) -> Category:
        return self._categories[0]

    def all(self) -> List[Category]:
        return list(self._categories)

    def contains(self, category_id: str) -> bool:
        return category_id in self._by_id

    def by_id(self, category_id: str) -> Category:
        category = self._by_id.get(category_id)
        if category is None:
            logger.debug(f"Unknown category '{category_id}', using '{self.default.id}'")
            return self.default
        return category

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self):
        return iter(self._categories)


category_index = CategoryIndex(CATEGORIES)
