"""
Configuration settings for Catchment Hypsometry Analysis
=========================================================

This module contains all paths, parameters, and constants for the analysis.
Users should modify the PATHS section for their specific system.

Project: Hypsometric curves and integrals of watershed sub-catchments
"""

import os
from pathlib import Path

# ============================================================================
# PATHS - USER MODIFIES THESE FOR THEIR SYSTEM
# ============================================================================

# Folder holding Minimum-Maximum.csv and the per-catchment C001.csv ... C093.csv
# tables exported from the GIS elevation-class model
DATA_DIR = "data"

# Extrema table (one row per catchment, implicit row number = catchment index)
EXTREMA_FILENAME = "Minimum-Maximum.csv"

# Output directory (will be created if it doesn't exist)
OUTPUT_DIR = "outputs"

# ============================================================================
# DATASET CONSTANTS
# ============================================================================

# Number of delineated sub-catchments in the watershed
N_CATCHMENTS = 93

# Catchment codes are the prefix plus the index zero-padded to ID_DIGITS
ID_PREFIX = "C"
ID_DIGITS = 3

# ============================================================================
# COLUMN NAME MAPPING
# ============================================================================
# Column names in the input tables (case-sensitive!)

COLS = {
    'elevation': 'ELEV',        # Elevation class value (m)
    'area': 'AREA_GEO',         # Planar area of the elevation class
    'minimum': 'minimum',       # Catchment minimum elevation (m)
    'maximum': 'maximum',       # Catchment maximum elevation (m)
    'elev_norm': 'ELEV_NORM',   # Relative elevation (0-1)
    'area_norm': 'AREA_NORM',   # Cumulative relative area (0-1)
}

# Summary table columns, in report order
SUMMARY_COLUMNS = ['CODE', 'MIN_ELEV', 'MAX_ELEV', 'AREA', 'H_INTEGRAL']

# ============================================================================
# ANALYSIS PARAMETERS
# ============================================================================

# Degree of the polynomial fitted to each hypsometric curve
POLY_DEGREE = 3

# A unique cubic fit (with intercept) needs at least this many distinct samples
MIN_SAMPLES = POLY_DEGREE + 1

# Fits with R² below this value are flagged as low quality (HI is still reported)
R2_WARNING_THRESHOLD = 0.95

# Rounding used in the summary table
AREA_DECIMALS = 2
HI_DECIMALS = 3

# ============================================================================
# VISUALIZATION PARAMETERS
# ============================================================================

PLOT_STYLE = 'seaborn-v0_8-whitegrid'

PLOT_PARAMS = {
    'font.size': 12,
    'axes.labelsize': 14,
    'axes.titlesize': 16,
    'legend.fontsize': 11,
    'figure.dpi': 150,
    'savefig.dpi': 300,
    'savefig.bbox': 'tight',
    'figure.figsize': (10, 6),
}

# Summary (population) plot
HI_BIN_WIDTH = 0.01
HI_XLIM = (0.45, 0.9)

SUMMARY_PLOT_FILENAME = "Summary_plot.png"
SUMMARY_TABLE_FILENAME = "Summary_table.csv"
FAILURE_TABLE_FILENAME = "Failed_catchments.csv"
REPORT_FILENAME = "Hypsometry_report.txt"

COLORS = {
    'curve': 'steelblue',
    'fit': 'darkred',
    'histogram': 'lightgray',
    'density': 'navy',
    'mean': 'darkred',
}


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def ensure_output_dir(output_dir=None):
    """Create output directory if it doesn't exist."""
    output_dir = OUTPUT_DIR if output_dir is None else output_dir
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    return output_dir


def get_extrema_path(data_dir=None):
    """Get path of the extrema table inside the data folder."""
    data_dir = DATA_DIR if data_dir is None else data_dir
    return Path(data_dir) / EXTREMA_FILENAME


def print_config_summary(data_dir=None, output_dir=None):
    """Print summary of current configuration."""
    data_dir = DATA_DIR if data_dir is None else data_dir
    output_dir = OUTPUT_DIR if output_dir is None else output_dir
    extrema_path = get_extrema_path(data_dir)

    print("=" * 60)
    print("CATCHMENT HYPSOMETRY ANALYSIS - Configuration Summary")
    print("=" * 60)
    print(f"\nInput Data:")
    print(f"  Data folder: {data_dir}")
    exists = "✓" if os.path.exists(extrema_path) else "✗"
    print(f"  [{exists}] Extrema table: {extrema_path}")
    print(f"  Catchments: {N_CATCHMENTS}")
    print(f"  Columns: {COLS['elevation']}, {COLS['area']}")
    print(f"\nFit:")
    print(f"  Polynomial degree: {POLY_DEGREE}")
    print(f"  R² warning threshold: {R2_WARNING_THRESHOLD}")
    print(f"\nOutput Directory: {output_dir}")
    print("=" * 60)


if __name__ == "__main__":
    print_config_summary()
