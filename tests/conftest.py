"""Shared test fixtures for protkit tests."""

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pandas as pd
import pytest
import yaml


@pytest.fixture
def peptide_df():
    """Small peptide table with a mix of valid and problematic rows."""
    return pd.DataFrame({
        'Protein.Group': ['P02768', 'P02768', 'P68871', 'P69905', 'Q9Y6K9'],
        'Modified.Sequence': [
            'AC(UniMod:4)EFAGFQC(UniMod:4)QIQFGPHNEQK',
            'LVNEVTEFAK',
            'M(UniMod:35)VHLTPEEK',
            np.nan,
            'S(UniMod:21)PEPTIDEK',
        ],
        'Precursor.Charge': [2, 2, 3, 2, 0],
    })


@pytest.fixture
def sample_config(tmp_path, peptide_df):
    """Write the peptide table to Excel plus a matching YAML config."""
    excel_path = str(tmp_path / 'peptides.xlsx')
    peptide_df.to_excel(excel_path, index=False)

    config = {
        'experiment': {
            'name': 'Test_Peptides',
        },
        'data_paths': {
            'input_file': excel_path,
            'output_dir': str(tmp_path / 'res'),
        },
        'data_columns': {
            'sequence': 'Modified.Sequence',
            'charge': 'Precursor.Charge',
        },
        'calculation': {
            'strict': False,
        },
        'output': {
            'excel': True,
            'header_style': 'green_bg',
            'histogram': True,
        },
    }

    config_path = str(tmp_path / 'peptides.yaml')
    with open(config_path, 'w') as f:
        yaml.dump(config, f)

    return config_path, tmp_path
