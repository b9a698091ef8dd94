"""Graph algorithms over the road network.

This subpackage contains the connected-component analysis used to
restrict a loaded map to its largest connected part.
"""
