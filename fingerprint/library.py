"""Reference images: the activity header and every known fingerprint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

import cv2
import numpy as np

LOG = logging.getLogger(__name__)

FRAGMENTS_PER_VARIANT = 4


def load_image(path: Union[str, Path]) -> np.ndarray:
    """Load image as read-only RGB uint8 array."""
    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError(f"failed to load image from path: {path}")
    image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    image.flags.writeable = False
    return image


@dataclass(frozen=True)
class FingerprintVariant:
    """One known fingerprint: full template plus its answer fragments in order."""

    index: int
    full: np.ndarray
    fragments: Tuple[np.ndarray, ...]

    def __post_init__(self) -> None:
        if len(self.fragments) != FRAGMENTS_PER_VARIANT:
            raise ValueError(
                f"fingerprint {self.index} needs {FRAGMENTS_PER_VARIANT} fragments, "
                f"got {len(self.fragments)}"
            )


@dataclass(frozen=True)
class ReferenceLibrary:
    """Read-only set of templates loaded once at startup."""

    header: np.ndarray
    variants: Tuple[FingerprintVariant, ...]

    @property
    def full_templates(self) -> List[np.ndarray]:
        return [variant.full for variant in self.variants]

    def variant(self, index: int) -> FingerprintVariant:
        """Return the variant with the given 1-based index."""
        for variant in self.variants:
            if variant.index == index:
                return variant
        raise KeyError(f"unknown fingerprint: {index}")

    @classmethod
    def load(cls, image_dir: Union[str, Path], count: int) -> "ReferenceLibrary":
        """Load ``header.png`` and ``<i>/full.png``, ``<i>/1..4.png`` for i in 1..count."""
        root = Path(image_dir)
        header = load_image(root / "header.png")
        variants = []
        for index in range(1, count + 1):
            folder = root / str(index)
            fragments = tuple(
                load_image(folder / f"{part}.png")
                for part in range(1, FRAGMENTS_PER_VARIANT + 1)
            )
            variants.append(
                FingerprintVariant(index=index, full=load_image(folder / "full.png"), fragments=fragments)
            )
        LOG.debug("Loaded %d fingerprints from %s", count, root)
        return cls(header=header, variants=tuple(variants))
