from .heatmap import ApplicationHeatmap, HeatmapDay, build_application_heatmap, weeks_for_width

__all__ = ["ApplicationHeatmap", "HeatmapDay", "build_application_heatmap", "weeks_for_width"]
