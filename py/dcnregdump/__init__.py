from .address import *
from .decoder import *
from .dump import *
from .enums import *
from .errors import *
from .locator import *
from .mmaptarget import *
from .parser import *
from .regdb import *
from .sections import *
from .target import *
