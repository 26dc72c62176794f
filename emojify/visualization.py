"""
Visualization utilities for emojified pictures and batch runs.
"""

from pathlib import Path
from typing import Dict, List, Optional

import matplotlib

matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from .emoji import Emoji


def plot_emojify_comparison(
    original: np.ndarray,
    result: np.ndarray,
    save_path: Path,
    title: str = "Emojified",
    labels: Optional[List[str]] = None,
):
    """
    Save the original and the emojified picture side by side.

    Args:
        original: Input picture
        result: Emojified picture
        save_path: Path to save the plot
        title: Title of the emojified panel
        labels: Per-face emoji names, shown under the title
    """
    fig, axes = plt.subplots(1, 2, figsize=(12, 6))

    axes[0].imshow(original)
    axes[0].set_title('Original', fontsize=14, fontweight='bold')
    axes[0].axis('off')

    subtitle = f"{title}\n{', '.join(labels)}" if labels else title
    axes[1].imshow(result)
    axes[1].set_title(subtitle, fontsize=14, fontweight='bold')
    axes[1].axis('off')

    plt.tight_layout()
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)


def plot_emoji_distribution(counts: Dict[Emoji, int], save_path: Path):
    """
    Plot how often each emoji was applied over a batch of pictures.

    Args:
        counts: Number of faces per category (missing categories count as 0)
        save_path: Path to save the plot
    """
    names = [emoji.label for emoji in Emoji]
    values = [counts.get(emoji, 0) for emoji in Emoji]

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.barh(names, values, color='steelblue')
    ax.set_xlabel('Faces', fontsize=12)
    ax.set_title('Emoji Distribution', fontsize=14, fontweight='bold')
    ax.grid(True, alpha=0.3, axis='x')

    plt.tight_layout()
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(save_path, dpi=300, bbox_inches='tight')
    plt.close(fig)
