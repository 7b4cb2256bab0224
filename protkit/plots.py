"""
Publication-styled plots.
"""

import os

import matplotlib.pyplot as plt
import seaborn as sns


_FIGURE_SIZE = (6, 4.5)
_TEXT_SIZE = 14
_FILL_COLOR = '#4E79A7'


def plot_histogram(data, variable, x_label, y_label, title, output_file, bin_width=None):
    """
    Plot a histogram in a clean journal style and save it as PNG.

    Parameters
    ----------
    data : pd.DataFrame
        Table containing the variable.
    variable : str
        Column to plot on the x-axis.
    x_label, y_label : str
        Axis labels.
    title : str
        Plot title.
    output_file : str
        Path of the PNG to write.
    bin_width : float, optional
        Bin width. Chosen automatically when None (default).

    Returns
    -------
    str
        Path of the saved figure.

    Example
    -------
    >>> plot_histogram(df, 'mz', 'm/z', 'Peptides', 'Precursor m/z', 'mz_hist.png')
    """
    if variable not in data.columns:
        raise KeyError(f"Column '{variable}' not found in data")

    values = data[variable].dropna()

    fig, ax = plt.subplots(figsize=_FIGURE_SIZE)

    hist_kwargs = {'binwidth': bin_width} if bin_width is not None else {}
    sns.histplot(x=values, ax=ax, color=_FILL_COLOR, edgecolor='black',
                 alpha=1.0, **hist_kwargs)

    ax.set_title(title, fontsize=_TEXT_SIZE + 2)
    ax.set_xlabel(x_label, fontsize=_TEXT_SIZE)
    ax.set_ylabel(y_label, fontsize=_TEXT_SIZE)
    ax.tick_params(labelsize=_TEXT_SIZE - 2)
    ax.grid(False)
    sns.despine(ax=ax)

    out_dir = os.path.dirname(output_file)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    plt.tight_layout()
    plt.savefig(output_file, dpi=300, bbox_inches='tight')
    plt.close(fig)

    return output_file
