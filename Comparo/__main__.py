import argparse
import logging
import sys
from multiprocessing.spawn import freeze_support
from Comparo.version import __version__


def main(call_args=None):

    """
    Main launcher function for the suite.
    :param call_args: optional argument string to be passed to execute the commands.
    Otherwise, the string will be derived from sys.argv[1:]
    """

    if call_args is None:
        call_args = sys.argv[1:]
    from Comparo.subprograms import compare

    parser = argparse.ArgumentParser(prog="Comparo",
                                     description="""Comparo is a program to compare a prediction
gene annotation against a reference one, at the level of loci and transcripts.""")

    parser.add_argument("--version", default=False, action="store_true",
                        help="Print Comparo current version and exit.")

    subparsers = parser.add_subparsers(
        title="Components",
        help="""These are the various components of Comparo:

""")

    subparsers.add_parser("compare", help="Comparo compare produces a detailed comparison of \
reference and prediction files. It has been directly inspired by ParsEval.")
    subparsers.choices["compare"] = compare.compare_parser()
    subparsers.choices["compare"].prog = "Comparo compare"

    try:
        args = parser.parse_args(call_args)
        if hasattr(args, "func"):
            args.func(args)
        elif args.version is True:
            print("Comparo v{}".format(__version__))
            sys.exit(0)
        else:
            parser.print_help()
    except KeyboardInterrupt:
        raise KeyboardInterrupt
    except BrokenPipeError:
        pass
    except Exception as exc:
        logger = logging.getLogger("main")
        logger.error("Comparo crashed, cause:")
        logger.exception(exc)
        import multiprocessing as mp
        for child in mp.active_children():
            child.terminate()

        sys.exit(1)


if __name__ == '__main__':
    freeze_support()
    sys.exit(main())
