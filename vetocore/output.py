"""
Verbosity-controlled messages for PVC and veto coalition computations.

Works like a stripped-down `logging.Logger` and is used as a singleton: the
module-level object `output` is shared by all rules in vetocore.

The verbosity levels are:

- CRITICAL
- ERROR
- WARNING
- INFO
- DETAILS
- DEBUG
- DEBUG2

The default verbosity is `WARNING`, so computations are silent unless a profile
cannot be evaluated.

"""

import textwrap

# should match the values defined in the logging module!
CRITICAL = 50
ERROR = 40
WARNING = 30
INFO = 20
DETAILS = 15
DEBUG = 10
DEBUG2 = 5

DEFAULT = WARNING

WIDTH = 79  # default line width for output

VERBOSITY_TO_NAME = {
    CRITICAL: "CRITICAL",
    ERROR: "ERROR",
    WARNING: "WARNING",
    INFO: "INFO",
    DETAILS: "DETAILS",
    DEBUG: "DEBUG",
    DEBUG2: "DEBUG2",
}


class Output:
    """
    Print messages depending on the current verbosity level.

    Parameters
    ----------
        verbosity : int
            Minimum level of importance of messages to be printed, as defined by
            constants in this module.

        logger : logging.Logger, optional
            Messages are additionally passed to this logger, independent of `verbosity`.

            The logger applies its own log level. `DETAILS` and `DEBUG2` do not exist in
            `logging` and are logged as `DEBUG`.
    """

    def __init__(self, verbosity=DEFAULT, logger=None):
        self.verbosity = verbosity
        self.logger = logger

    def set_verbosity(self, verbosity=DEFAULT):
        """
        Set verbosity level.

        Parameters
        ----------
            verbosity : int
                Verbosity level.
        """
        self.verbosity = verbosity

    def _print(self, verbosity, msg, wrap, indent):
        if verbosity >= self.verbosity:
            if wrap:
                msg = "\n".join(
                    textwrap.fill(
                        line,
                        width=WIDTH,
                        break_long_words=False,
                        initial_indent=indent,
                        subsequent_indent=indent,
                    )
                    for line in msg.split("\n")
                )
            print(msg)

        if self.logger:
            self.logger.log(verbosity if verbosity not in (DETAILS, DEBUG2) else DEBUG, msg)

    def debug2(self, msg, wrap=True, indent=""):
        """Print a message with verbosity level DEBUG2."""
        self._print(DEBUG2, msg, wrap, indent)

    def debug(self, msg, wrap=True, indent=""):
        """Print a message with verbosity level DEBUG."""
        self._print(DEBUG, msg, wrap, indent)

    def details(self, msg, wrap=True, indent=""):
        """
        Print a message with verbosity level DETAILS.

        Used for intermediate steps, e.g., the eliminations of each voter in
        successive elimination.

        Parameters
        ----------
            msg : str
                The message.

            wrap : bool, optional
                Wrap the message at `WIDTH` characters (if too long).

            indent : str, optional
                Indent each line with the this string.
        """
        self._print(DETAILS, msg, wrap, indent)

    def info(self, msg, wrap=True, indent=""):
        """
        Print a message with verbosity level INFO.

        Used for headers and results.

        Parameters
        ----------
            msg : str
                The message.

            wrap : bool, optional
                Wrap the message at `WIDTH` characters (if too long).

            indent : str, optional
                Indent each line with the this string.
        """
        self._print(INFO, msg, wrap, indent)

    def warning(self, msg, wrap=True, indent=""):
        """
        Print a message with verbosity level WARNING.

        Used when a profile is refused because it contains invalid rankings.

        Parameters
        ----------
            msg : str
                The message.

            wrap : bool, optional
                Wrap the message at `WIDTH` characters (if too long).

            indent : str, optional
                Indent each line with the this string.
        """
        self._print(WARNING, msg, wrap, indent)

    def error(self, msg, wrap=True, indent=""):
        """Print a message with verbosity level ERROR."""
        self._print(ERROR, msg, wrap, indent)

    def critical(self, msg, wrap=True, indent=""):
        """Print a message with verbosity level CRITICAL."""
        # just for consistency with the logging module
        self._print(CRITICAL, msg, wrap, indent)


output = Output()
