"""
charts package. chart_specs has no plotting dependency; import
plotting only when PNG output is wanted.
"""
