"""
Utility functions for protkit.

Internal helpers for configuration loading and directory management,
plus project folder bootstrapping.
"""

import os

import yaml


PROJECT_FOLDERS = ('data', 'res', 'doc', 'pub')

_CONFIG_DEFAULTS = {
    'data_columns': {
        'charge': 'Precursor.Charge',
    },
    'calculation': {
        'strict': False,
        'default_charge': 2,
    },
    'output': {
        'excel': True,
        'header_style': 'blue_bg',
        'histogram': True,
    },
}


def _load_config(config_path):
    """Load YAML config file and fill in optional sections."""
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    for section, defaults in _CONFIG_DEFAULTS.items():
        merged = dict(defaults)
        merged.update(config.get(section) or {})
        config[section] = merged

    for section, key in [('data_paths', 'input_file'),
                         ('data_paths', 'output_dir'),
                         ('data_columns', 'sequence')]:
        if key not in (config.get(section) or {}):
            raise KeyError(f"Config is missing required key '{section}.{key}'")

    return config


def _create_output_dirs(base_dir):
    """Create output directory structure for a batch run."""
    dirs = {
        'base': base_dir,
        'figures': f"{base_dir}/figures",
        'tables': f"{base_dir}/tables"
    }

    for dir_path in dirs.values():
        os.makedirs(dir_path, exist_ok=True)

    return dirs


def setup_project(base_dir='.'):
    """
    Create the standard project folders if they do not exist.

    Folders: ``data`` (raw input), ``res`` (results), ``doc``
    (documentation) and ``pub`` (publication figures and tables).

    Parameters
    ----------
    base_dir : str, optional
        Project root (default: current directory).

    Returns
    -------
    dict
        Maps folder names to their paths.

    Example
    -------
    >>> from protkit import setup_project
    >>> folders = setup_project('my_project')
    Created folder: my_project/data
    ...
    """
    folders = {}

    for name in PROJECT_FOLDERS:
        path = os.path.join(base_dir, name)
        if not os.path.isdir(path):
            os.makedirs(path)
            print(f"Created folder: {path}")
        else:
            print(f"Folder already exists: {path}")
        folders[name] = path

    return folders
