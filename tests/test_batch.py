"""Tests for protkit.batch module."""

import os

import numpy as np
import pandas as pd
import pytest
import yaml

from protkit import InvalidChargeError, UnknownTokenError, annotate_mz, calculate_mz, mz_table


class TestAnnotateMz:
    def test_adds_mz_columns(self, peptide_df):
        result = annotate_mz(peptide_df, 'Modified.Sequence', 'Precursor.Charge')

        assert 'mz' in result.columns
        assert 'peptide_mass' in result.columns
        assert len(result) == len(peptide_df)

    def test_values_match_calculate_mz(self, peptide_df):
        result = annotate_mz(peptide_df, 'Modified.Sequence', 'Precursor.Charge')

        for i in [0, 1, 2]:
            row = result.iloc[i]
            expected = calculate_mz(row['Modified.Sequence'], row['Precursor.Charge'])
            assert row['mz'] == pytest.approx(expected.mz)
            assert row['peptide_mass'] == pytest.approx(expected.peptide_mass)

    def test_missing_sequence_and_bad_charge_give_nan(self, peptide_df):
        result = annotate_mz(peptide_df, 'Modified.Sequence', 'Precursor.Charge')

        assert np.isnan(result['mz'].iloc[3])
        assert np.isnan(result['mz'].iloc[4])
        assert result['mz'].notna().sum() == 3

    def test_default_charge_used_without_charge_column(self, peptide_df):
        result = annotate_mz(peptide_df, 'Modified.Sequence', default_charge=3)

        assert (result['charge'] == 3).all()
        expected = calculate_mz('LVNEVTEFAK', 3)
        assert result['mz'].iloc[1] == pytest.approx(expected.mz)

    def test_does_not_mutate_input(self, peptide_df):
        original_columns = list(peptide_df.columns)

        annotate_mz(peptide_df, 'Modified.Sequence', 'Precursor.Charge')

        assert list(peptide_df.columns) == original_columns

    def test_strict_propagates_invalid_charge(self, peptide_df):
        with pytest.raises(InvalidChargeError):
            annotate_mz(peptide_df, 'Modified.Sequence', 'Precursor.Charge', strict=True)

    def test_strict_propagates_unknown_token(self):
        df = pd.DataFrame({'seq': ['PEPTIDEK', 'PEPXIDEK'], 'z': [2, 2]})
        with pytest.raises(UnknownTokenError):
            annotate_mz(df, 'seq', 'z', strict=True)

    def test_existing_charge_column_not_overwritten(self):
        df = pd.DataFrame({'seq': ['PEPTIDEK'], 'charge': [3]})

        with pytest.raises(ValueError):
            annotate_mz(df, 'seq')

        result = annotate_mz(df, 'seq', 'charge')
        assert result['charge'].iloc[0] == 3
        assert result['mz'].iloc[0] == pytest.approx(calculate_mz('PEPTIDEK', 3).mz)

    def test_missing_column_raises(self, peptide_df):
        with pytest.raises(KeyError):
            annotate_mz(peptide_df, 'Sequence', 'Precursor.Charge')
        with pytest.raises(KeyError):
            annotate_mz(peptide_df, 'Modified.Sequence', 'Charge')


class TestMzTable:
    def test_returns_required_keys(self, sample_config):
        config_path, _ = sample_config
        data = mz_table(config_path)

        assert 'df' in data
        assert 'config' in data
        assert 'metadata' in data
        assert 'output_dirs' in data

    def test_writes_outputs(self, sample_config):
        config_path, tmp_path = sample_config
        mz_table(config_path)

        assert os.path.exists(tmp_path / 'res' / 'tables' / 'peptide_mz.csv')
        assert os.path.exists(tmp_path / 'res' / 'tables' / 'peptide_mz.xlsx')
        assert os.path.exists(tmp_path / 'res' / 'figures' / 'mz_histogram.png')

    def test_csv_matches_returned_table(self, sample_config):
        config_path, tmp_path = sample_config
        data = mz_table(config_path)

        saved = pd.read_csv(tmp_path / 'res' / 'tables' / 'peptide_mz.csv')
        np.testing.assert_allclose(saved['mz'].values, data['df']['mz'].values)

    def test_metadata_counts(self, sample_config):
        config_path, _ = sample_config
        metadata = mz_table(config_path)['metadata']

        assert metadata['n_peptides'] == 5
        assert metadata['n_valid'] == 3
        assert metadata['n_invalid'] == 2
        assert metadata['charge_counts'] == {0: 1, 2: 3, 3: 1}
        low, high = metadata['mz_range']
        assert low < high

    def test_optional_outputs_disabled(self, sample_config):
        config_path, tmp_path = sample_config
        with open(config_path) as f:
            config = yaml.safe_load(f)
        config['output'] = {'excel': False, 'histogram': False}
        with open(config_path, 'w') as f:
            yaml.dump(config, f)

        mz_table(config_path)

        assert os.path.exists(tmp_path / 'res' / 'tables' / 'peptide_mz.csv')
        assert not os.path.exists(tmp_path / 'res' / 'tables' / 'peptide_mz.xlsx')
        assert not os.path.exists(tmp_path / 'res' / 'figures' / 'mz_histogram.png')

    def test_strict_config_raises(self, sample_config):
        config_path, _ = sample_config
        with open(config_path) as f:
            config = yaml.safe_load(f)
        config['calculation']['strict'] = True
        with open(config_path, 'w') as f:
            yaml.dump(config, f)

        with pytest.raises(InvalidChargeError):
            mz_table(config_path)

    def test_csv_input_without_charge_column(self, tmp_path):
        csv_path = str(tmp_path / 'peptides.csv')
        pd.DataFrame({'Sequence': ['PEPTIDEK', 'M(UniMod:35)K']}).to_csv(csv_path, index=False)

        config = {
            'data_paths': {'input_file': csv_path, 'output_dir': str(tmp_path / 'out')},
            'data_columns': {'sequence': 'Sequence'},
            'calculation': {'default_charge': 1},
            'output': {'excel': False, 'histogram': False},
        }
        config_path = str(tmp_path / 'config.yaml')
        with open(config_path, 'w') as f:
            yaml.dump(config, f)

        df = mz_table(config_path)['df']

        assert (df['charge'] == 1).all()
        assert df['mz'].iloc[1] == pytest.approx(131.04049 + 15.9949 + 128.09496 + 1.0078)

    def test_missing_input_file_raises(self, sample_config):
        config_path, tmp_path = sample_config
        os.remove(tmp_path / 'peptides.xlsx')

        with pytest.raises(FileNotFoundError):
            mz_table(config_path)

    def test_warns_about_invalid_rows(self, sample_config, capsys):
        config_path, _ = sample_config
        mz_table(config_path)

        assert 'Warning: 2 peptides' in capsys.readouterr().out

    def test_charge_column_defaults_to_precursor_charge(self, tmp_path):
        csv_path = str(tmp_path / 'peptides.csv')
        pd.DataFrame({
            'Modified.Sequence': ['PEPTIDEK'],
            'Precursor.Charge': [3],
        }).to_csv(csv_path, index=False)

        config = {
            'data_paths': {'input_file': csv_path, 'output_dir': str(tmp_path / 'out')},
            'data_columns': {'sequence': 'Modified.Sequence'},
            'output': {'excel': False, 'histogram': False},
        }
        config_path = str(tmp_path / 'config.yaml')
        with open(config_path, 'w') as f:
            yaml.dump(config, f)

        df = mz_table(config_path)['df']

        assert df['mz'].iloc[0] == pytest.approx(calculate_mz('PEPTIDEK', 3).mz)
        assert 'charge' not in df.columns

    def test_bad_header_style_fails_before_writing(self, sample_config):
        config_path, tmp_path = sample_config
        with open(config_path) as f:
            config = yaml.safe_load(f)
        config['output']['header_style'] = 'purple'
        with open(config_path, 'w') as f:
            yaml.dump(config, f)

        with pytest.raises(ValueError):
            mz_table(config_path)

        assert not os.path.exists(tmp_path / 'res' / 'tables' / 'peptide_mz.csv')
