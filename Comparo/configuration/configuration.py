import dataclasses
from dataclasses import field
from typing import Optional
from marshmallow import validate
from marshmallow_dataclass import dataclass
from ..utilities.log_utils import LoggingConfiguration, create_null_logger
from ..exceptions import InvalidConfiguration


@dataclass
class ComparisonConfiguration:
    """
    Configuration properties for Comparo.
    """

    max_transcripts: int = field(default=32, metadata={
        "metadata": {"description": "Maximum number of transcripts of a single provenance in a locus. "
                                    "Larger loci are reported as skipped. Set to 0 to disable the limit."},
        "validate": validate.Range(min=0)
    })
    max_comparisons: int = field(default=512, metadata={
        "metadata": {"description": "Maximum number of clique pairs to score in a single locus. "
                                    "Larger loci are reported as skipped. Set to 0 to disable the limit."},
        "validate": validate.Range(min=0)
    })
    tolerance: float = field(default=1e-9, metadata={
        "metadata": {"description": "Tolerance used when comparing floating point scores, "
                                    "both for perfect matches and for ties between pairings."},
        "validate": validate.Range(min=0, max=0.5)
    })
    threads: int = field(default=1, metadata={
        "metadata": {"description": "Number of processes used to analyse the sequences in parallel."},
        "validate": validate.Range(min=1)
    })
    multiprocessing_method: str = field(default="spawn", metadata={
        "metadata": {"description": "Which method (fork, spawn, forkserver) Comparo should use for multiprocessing"},
        "validate": validate.OneOf(["spawn", "fork", "forkserver"])
    })
    log_settings: LoggingConfiguration = field(default_factory=LoggingConfiguration, metadata={
                "metadata": {"description": "Settings related to the verbosity of logs"}
    })
    filename: Optional[str] = field(default=None, metadata={"allow_none": True})

    def __post_init__(self):
        self.check()

    def check(self, logger=create_null_logger()):
        errors = self.Schema().validate(dataclasses.asdict(self))
        if len(errors) > 0:
            exc = InvalidConfiguration(f"The configuration is invalid, please double check. Errors:\n{errors}")
            logger.critical(exc)
            raise exc
