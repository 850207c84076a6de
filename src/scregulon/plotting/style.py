# scregulon plotting style, SeuratExtend-inspired palettes

# Discrete palette (Nature Publishing Group colours)
SEURAT_DISCRETE = [
    "#4DBBD5",   # teal
    "#E64B35",   # red-orange
    "#00A087",   # green-teal
    "#3C5488",   # navy blue
    "#F39B7F",   # salmon
    "#8491B4",   # slate-lavender
    "#91D1C2",   # mint
    "#DC0000",   # crimson
    "#7E6148",   # umber
    "#B09C85",   # warm beige
    "#FFDC91",   # straw
    "#A9D18E",   # moss green
]

# Diverging map for signed scores (TF activity, centred at 0)
ACTIVITY_CMAP = "RdBu_r"
FEATURE_CMAP = "viridis"

TITLE_SIZE = 13
TICK_SIZE = 8


def set_style():
    """
    Apply SeuratExtend-like styles to matplotlib global parameters.
    """
    import matplotlib.pyplot as plt
    import seaborn as sns

    sns.set_style("ticks")
    plt.rcParams["axes.spines.top"] = False
    plt.rcParams["axes.spines.right"] = False
    plt.rcParams["font.size"] = 12
    plt.rcParams["axes.titlesize"] = 14
    plt.rcParams["axes.labelsize"] = 12
    plt.rcParams["legend.frameon"] = False


def discrete_colors(n):
    """Return a list of n discrete colors, cycling the palette."""
    colors = SEURAT_DISCRETE * ((n // len(SEURAT_DISCRETE)) + 1)
    return colors[:n]
