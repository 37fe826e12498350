from casework.variant import Variant
from casework.cases import matcher

SHAPE = Variant("shape", circle="radius", rect="width height")

perimeter = matcher(SHAPE, circle=lambda r: 2 * 3.14159 * r)
