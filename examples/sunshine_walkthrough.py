"""
Example: Opening and Rendering an Image from a CM SAF NetCDF File

This example walks through a NetCDF file of monthly sunshine duration over
Europe for August 2018 from the CM SAF Interim Climate Data Record
(``SDUms201808010000401UD1000101UD.nc``). Put the data file in the same
folder as this script, or point CMSAF_READER_DATA_DIR at its folder.

Data and the product catalogue: https://wui.cmsaf.eu/
Setting ``draw_borders`` to True downloads Natural Earth shapes through cartopy.
"""

from pathlib import Path

import matplotlib.pyplot as plt

import cmsaf_reader as cms

draw_borders = False
cms.setup_logging("INFO")

# ============================================================================
# Example 1: Working Directory and Data File
# ============================================================================

print("="*70)
print("Example 1: Working Directory and Data File")
print("="*70)

# Files directly in the working directory can be referred to by name
cms.set_working_directory(Path(__file__).resolve().parent)
print(f"\nWorking directory: {cms.get_working_directory()}")

data_path = cms.DEFAULT_DATA_FILENAME
print(f"{data_path} exists: {cms.file_exists(data_path)}")

# ============================================================================
# Example 2: Reading Metadata
# ============================================================================

print("\n" + "="*70)
print("Example 2: Reading Metadata")
print("="*70)

nc = cms.open_netcdf(data_path)

# Full listing: every variable with its attributes, dimensions, global attributes
print(nc.describe())

# Concise listing; the time dimension has length 1 so the data is essentially 2D
print()
print(cms.format_file_info(cms.get_file_info(nc)))

# ============================================================================
# Example 3: Extracting Data and Variables
# ============================================================================

print("\n" + "="*70)
print("Example 3: Extracting Data and Variables")
print("="*70)

# Length-1 time dimension is dropped: (lat, lon)
sdu_array = nc.get_variable("SDU")
print(f"\nSDU shape: {sdu_array.shape}")

# Python indices are zero-based
print(f"Single value [9, 9]: {cms.extract_value(sdu_array, 9, 9)}")
print("Range of values [0:5, 0:10]:")
print(cms.extract_window(sdu_array, (0, 5), (0, 10)))

lon_vals, lat_vals = nc.get_coordinates()
print(f"\nlon: {lon_vals.shape}, lat: {lat_vals.shape}")
print(lat_vals)

# Close the connection once extraction is finished
nc.close()

# ============================================================================
# Example 4: Simple Calculations
# ============================================================================

print("\n" + "="*70)
print("Example 4: Simple Calculations")
print("="*70)

print(f"\nMean sunshine duration: {cms.grid_mean(sdu_array):.2f} hours")
sdu_seconds = cms.hours_to_seconds(sdu_array)
print(f"Mean sunshine duration: {cms.grid_mean(sdu_seconds):.0f} seconds")
print(cms.summarize_grid(sdu_array, units="hours"))

# ============================================================================
# Example 5: Plotting
# ============================================================================

print("\n" + "="*70)
print("Example 5: Plotting")
print("="*70)

# Quick look at the raw array
cms.plot_image(sdu_array)

# Labelled map with a reversed colour scale
options = cms.PlotOptions(
    title="CM SAF Sunshine Duration",
    subtitle="Monthly Sum August 2018",
    legend_label="Sunshine Duration (hours)",
    reverse_cmap=True,
    borders=draw_borders,
)
cms.plot_grid(lon_vals, lat_vals, sdu_array, options)

# Raster: a spatial object that knows its coordinate reference system
sdu_ras = cms.open_raster(data_path, "SDU")
cms.plot_raster(sdu_ras, cms.PlotOptions(title="SDU", borders=draw_borders))

# Change the projection of the raster
new_proj = "+proj=lcc +lat_1=48 +lat_2=33 +lon_0=-100 +datum=WGS84"
sdu_ras_new_proj = cms.reproject_grid(sdu_ras, new_proj)
cms.plot_projected_raster(sdu_ras_new_proj, cms.PlotOptions(title="SDU", borders=draw_borders))

# ============================================================================
# Example 6: Tidy Data Frame
# ============================================================================

print("\n" + "="*70)
print("Example 6: Tidy Data Frame")
print("="*70)

# One row per grid cell: SDU, lon, lat, time
sdu_df = cms.to_tidy_dataframe(data_path)
print(cms.tidy_head(sdu_df))

# Subset while converting
alps = cms.Region(lon_range=(5, 16), lat_range=(44, 48))
print(cms.tidy_head(cms.to_tidy_dataframe(data_path, region=alps)))

plt.show()
