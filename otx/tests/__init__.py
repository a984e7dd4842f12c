from .common import ExpectedOTResult, cast, lattice, uniform
from .coincident import coincident_points, unit_square_corners, coincident_lattice
from .translation import translated_corners
from .affine import affine_copy, random_problem
