# gridprops/config/defaults.py
"""Default configuration values for property loading."""

from pathlib import Path

# Project path
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / 'logs'

PATHS = {
    'project_root': str(PROJECT_ROOT),
    'logs_dir': str(LOGS_DIR),
}

LOGGING = {
    'level': 'INFO',
    'console': True,
    'log_file': None,  # defaults to <logs_dir>/gridprops.log
    'max_file_size': 10 * 1024 * 1024,  # 10MB
    'backup_count': 3,
}

# Keyword schemas: name, default value and dimension string.
# Integer keywords are region selectors, double keywords physical properties.
PROPERTIES = {
    'int_keywords': [
        {'name': 'ACTNUM', 'default': 1, 'dimension': '1'},
        {'name': 'SATNUM', 'default': 1, 'dimension': '1'},
        {'name': 'IMBNUM', 'default': 1, 'dimension': '1'},
        {'name': 'PVTNUM', 'default': 1, 'dimension': '1'},
        {'name': 'EQLNUM', 'default': 1, 'dimension': '1'},
        {'name': 'FIPNUM', 'default': 1, 'dimension': '1'},
        {'name': 'ROCKNUM', 'default': 1, 'dimension': '1'},
        {'name': 'MULTNUM', 'default': 1, 'dimension': '1'},
        {'name': 'FLUXNUM', 'default': 1, 'dimension': '1'},
        {'name': 'OPERNUM', 'default': 1, 'dimension': '1'},
    ],
    'double_keywords': [
        {'name': 'PORO', 'default': float('nan'), 'dimension': '1'},
        {'name': 'NTG', 'default': 1.0, 'dimension': '1'},
        {'name': 'PERMX', 'default': float('nan'), 'dimension': 'Permeability'},
        {'name': 'PERMY', 'default': float('nan'), 'dimension': 'Permeability'},
        {'name': 'PERMZ', 'default': float('nan'), 'dimension': 'Permeability'},
        {'name': 'MULTX', 'default': 1.0, 'dimension': '1'},
        {'name': 'MULTY', 'default': 1.0, 'dimension': '1'},
        {'name': 'MULTZ', 'default': 1.0, 'dimension': '1'},
        {'name': 'MULTPV', 'default': 1.0, 'dimension': '1'},
        {'name': 'TOPS', 'default': float('nan'), 'dimension': 'Length'},
        {'name': 'SWL', 'default': 0.0, 'dimension': '1'},
        {'name': 'SWCR', 'default': 0.0, 'dimension': '1'},
        {'name': 'SWU', 'default': 0.0, 'dimension': '1'},
        {'name': 'SGL', 'default': 0.0, 'dimension': '1'},
        {'name': 'SGCR', 'default': 0.0, 'dimension': '1'},
        {'name': 'SGU', 'default': 0.0, 'dimension': '1'},
        {'name': 'SOWCR', 'default': 0.0, 'dimension': '1'},
        {'name': 'SOGCR', 'default': 0.0, 'dimension': '1'},
        {'name': 'ISWU', 'default': 0.0, 'dimension': '1'},
        {'name': 'ISGU', 'default': 0.0, 'dimension': '1'},
        {'name': 'ISGCR', 'default': 0.0, 'dimension': '1'},
    ],
}

LOADING = {
    # Keywords whose values are meaningful for inactive cells too
    'inactive_cell_keywords': ['ACTNUM', 'TOPS', 'MULTPV'],
    # Data keywords interpreted as multipliers on the current values
    'multiplier_keywords': [],
}

AQUIFER = {
    'connection_defaults': {
        'TRANS_MULT': 1.0,
        'TRANS_OPTION': 0,
        'ALLOW_INTERNAL_CELLS': 'NO',
        'VEFRAC': 1.0,
        'VEFRACP': 1.0,
    },
}
