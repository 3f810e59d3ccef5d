"""Visualization boundary: chart-ready H-R records (no rendering)."""

from starfield.visualization.chart_data import ChartDataBuilder, temperature_to_color

__all__ = ['ChartDataBuilder', 'temperature_to_color']
