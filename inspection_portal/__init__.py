"""Report PDF rendering and accounting attachment relay for the inspections dashboard."""
