"""
Table transforms for exported proteomics intensity tables.

Log2 transformation, z-score normalization, and cleaning of column
names exported by Proteome Discoverer / DIA-NN into identifier-safe names.
"""

import re

import numpy as np
import pandas as pd


def _as_column_list(df, columns):
    """Validate the requested columns and return them as a list."""
    if isinstance(columns, str):
        columns = [columns]
    columns = list(columns)

    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found in data: {missing}")

    return columns


def log2_transform(df, columns, pseudocount=0):
    """
    Log2 transform selected columns.

    Parameters
    ----------
    df : pd.DataFrame
        Input table. Not modified.
    columns : str or list of str
        Columns to transform.
    pseudocount : float, optional
        Added before taking the log (default: 0, so zeros become -inf).

    Returns
    -------
    pd.DataFrame
        Copy of df with the columns log2 transformed.

    Example
    -------
    >>> df = log2_transform(df, ['Intensity_A', 'Intensity_B'])
    """
    columns = _as_column_list(df, columns)

    df = df.copy()
    with np.errstate(divide='ignore'):
        df[columns] = np.log2(df[columns].astype(float) + pseudocount)

    return df


def normalize_zscore(df, columns):
    """
    Z-score normalize selected columns (mean=0, std=1 per column).

    Missing values are ignored when computing the mean and standard
    deviation and stay missing in the output.

    Parameters
    ----------
    df : pd.DataFrame
        Input table. Not modified.
    columns : str or list of str
        Columns to normalize.

    Returns
    -------
    pd.DataFrame
        Copy of df with the columns normalized.
    """
    columns = _as_column_list(df, columns)

    df = df.copy()
    for col in columns:
        values = df[col].astype(float)
        df[col] = (values - values.mean()) / values.std()

    return df


def _clean_names(names):
    cleaned = []
    for name in names:
        name = re.sub(r'[^0-9A-Za-z_]', '_', str(name))
        name = re.sub(r'_+', '_', name).strip('_')
        # Identifiers cannot be empty or start with a digit
        if not name or name[0].isdigit():
            name = 'X' + name
        cleaned.append(name)

    used = set()
    unique = []
    for name in cleaned:
        candidate = name
        n = 0
        while candidate in used:
            n += 1
            candidate = f"{name}_{n}"
        used.add(candidate)
        unique.append(candidate)

    return unique


def make_friendly_names(x):
    """
    Clean names so they are valid, unique identifiers.

    Non-alphanumeric characters become underscores, repeated underscores
    are collapsed, leading/trailing underscores are removed, names that
    are empty or start with a digit get an ``X`` prefix, and duplicates
    get ``_1``, ``_2``... suffixes.

    Parameters
    ----------
    x : pd.DataFrame or list of str
        A DataFrame (its columns are renamed) or a sequence of names.

    Returns
    -------
    pd.DataFrame or list of str
        Same kind of object as the input.

    Example
    -------
    >>> make_friendly_names(['Abundance #1', 'Sample: Value'])
    ['Abundance_1', 'Sample_Value']
    """
    if isinstance(x, pd.DataFrame):
        df = x.copy()
        df.columns = _clean_names(df.columns)
        return df

    if isinstance(x, (list, tuple, pd.Index, pd.Series)):
        return _clean_names(x)

    raise TypeError("Input must be a DataFrame or a list of names.")
