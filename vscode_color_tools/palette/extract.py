import numpy as np
from PIL import Image
from sklearn.cluster import KMeans

from ..color import create_color

# Below this HSL saturation (percent) a cluster is treated as gray
MIN_ACCENT_SATURATION = 10


def _load_pixels(image_path, size):
    img = Image.open(image_path).convert("RGB")
    img.thumbnail((size, size))
    return np.array(img).reshape(-1, 3)


def _drop_extremes(pixels, minimum):
    """Drop near-black and near-white pixels unless fewer than ``minimum`` remain"""
    totals = pixels.sum(axis=1)
    kept = pixels[(totals > 30) & (totals < 735)]
    if len(kept) < minimum:
        return pixels
    return kept


def extract_colors(image_path, n_colors=12):
    """Extract dominant colors using k-means clustering

    Near-black and near-white pixels are ignored unless too few pixels remain.

    Args:
        image_path: Path to the source image
        n_colors: Number of clusters

    Returns:
        list of Color, largest cluster first
    """
    filtered_pixels = _drop_extremes(_load_pixels(image_path, 300), n_colors)

    n_clusters = max(1, min(n_colors, len(filtered_pixels)))
    kmeans = KMeans(n_clusters=n_clusters, random_state=42, n_init=10)
    kmeans.fit(filtered_pixels)

    counts = np.bincount(kmeans.labels_, minlength=n_clusters)
    order = np.argsort(-counts, kind="stable")

    colors = []
    for idx in order:
        center = kmeans.cluster_centers_[idx]
        r, g, b = int(center[0]), int(center[1]), int(center[2])
        colors.append(create_color(r, g, b))

    return colors


def find_average_color(image_path):
    """Mean color of an image's mid-tone pixels (all pixels if it has none)"""
    pixels = _drop_extremes(_load_pixels(image_path, 100), 1)
    r, g, b = (int(v) for v in pixels.mean(axis=0))
    return create_color(r, g, b)


def pick_accent(colors):
    """Pick the most vivid color, favouring mid lightness over near black/white"""

    def vividness(color):
        _, s, l = color.hsl
        return s * (1 - abs(l - 50) / 50)

    return max(colors, key=vividness)


def base_color_from_image(image_path, n_colors=12):
    """Choose a theme base color for an image.

    The most vivid dominant color wins. When every cluster is close to gray
    the image's average color is used instead, so washed-out images keep
    their overall tint rather than the tint of one cluster.

    Args:
        image_path: Path to the source image
        n_colors: Number of clusters to consider

    Returns:
        Color
    """
    accent = pick_accent(extract_colors(image_path, n_colors=n_colors))
    if accent.hsl[1] >= MIN_ACCENT_SATURATION:
        return accent
    return find_average_color(image_path)


def palette_from_image(image_path, n_colors=12):
    """Build an annotation palette (unique hex strings) from an image"""
    seen = []
    for color in extract_colors(image_path, n_colors=n_colors):
        if color.hex not in seen:
            seen.append(color.hex)
    return seen
