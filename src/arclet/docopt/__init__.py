"""docopt 概览"""

from .action import ActType as ActType
from .action import Action as Action
from .arguments import Arguments as Arguments
from .base import Argument as Argument
from .base import Command as Command
from .base import Config as Config
from .base import Either as Either
from .base import OneOrMore as OneOrMore
from .base import Option as Option
from .base import OptionRef as OptionRef
from .base import OptionsShortcut as OptionsShortcut
from .base import Optional as Optional
from .base import Required as Required
from .config import Namespace as Namespace
from .config import global_config as global_config
from .config import namespace as namespace
from .core import Docopt as Docopt
from .core import docopt as docopt
from .exceptions import DocoptException as DocoptException
from .exceptions import DocoptExit as DocoptExit
from .exceptions import GrammarError as GrammarError
from .exceptions import GrammarWarning as GrammarWarning
from .exceptions import HelpRequested as HelpRequested
from .exceptions import ParseFailure as ParseFailure
from .exceptions import SpecialOptionTriggered as SpecialOptionTriggered
from .exceptions import UsagePatternMismatch as UsagePatternMismatch
from .exceptions import UserInputError as UserInputError
from .exceptions import VersionRequested as VersionRequested
from .manager import grammar_manager as grammar_manager
from .output import output_manager as output_manager

__version__ = "0.1.0"
