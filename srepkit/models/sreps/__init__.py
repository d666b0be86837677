from .errors import SRepError, InvalidArgument, InvalidState, NumericDegeneracy
from .geometry import Geometry
from .spoke import Spoke
from .srep import SkeletalPoint, SkeletalGrid, CrestPoint, Crest, EllipticalSRep
from .interpolater import Interpolater, interpolate, interpolate_into
