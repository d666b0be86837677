"""Defaults and limits shared by the s-rep interpolation code.

Engine parameters are constructor arguments of ``Interpolater``; the values
here are only their defaults.
"""
import numpy as np

## Number of times the linear resolution is doubled when no level is given
DEFAULT_INTERPOLATION_LEVEL = 3

## Upper bound on the number of skeletal + crest points of an interpolated s-rep
MAX_INTERPOLATED_POINTS = 10**7

## Largest deviation of |U| from 1 accepted for an input spoke direction
UNIT_TOLERANCE = 1e-6

## dot(a, b) <= -1 + ANTIPODAL_TOLERANCE is treated as a half-turn
ANTIPODAL_TOLERANCE = 1e-12

## |a x b| below this means the two directions coincide
PARALLEL_TOLERANCE = 1e-12

## Allowed distance between a crest point and its grid ring point in the output
CREST_TOLERANCE = 1e-9

## Axes used to pick the great circle between two opposite directions
REFERENCE_AXIS = np.array([0.0, 0.0, 1.0])
SECONDARY_AXIS = np.array([1.0, 0.0, 0.0])

## |a x REFERENCE_AXIS| below this switches the tie-break to SECONDARY_AXIS
AXIS_TOLERANCE = 1e-6

## Skeletal sheet interpolation schemes understood by Interpolater
SKELETON_SCHEMES = ('linear', 'hermite')

## File name suffixes used when exporting an s-rep to a directory
HEADER_SUFFIX = '-header.xml'
UP_SPOKES_SUFFIX = '-up-spokes.vtp'
DOWN_SPOKES_SUFFIX = '-down-spokes.vtp'
CREST_SPOKES_SUFFIX = '-crest-spokes.vtp'
