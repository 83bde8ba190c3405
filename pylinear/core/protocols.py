"""
Core protocols for PyLinear.

We use Protocol (structural typing) rather than ABC (nominal typing) so
backends only need the right shape, not a common base class.
"""

from typing import Protocol, TypeVar, runtime_checkable

from pylinear.core.result import Result

D = TypeVar('D', contravariant=True)  # Design type
P = TypeVar('P', covariant=True)      # Parameter payload type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a validated design and produces a parameter payload
    wrapped in a Result. Backends are stateless; all configuration is passed
    at construction time.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{engine}_{algorithm}'
        Examples: 'python_gauss', 'lapack_lu'
        """
        ...

    def solve(self, design: D) -> Result[P]:
        """
        Execute the computation.

        A singular system is not an error: backends report it inside the
        payload and Result.warnings.

        Raises:
            ValidationError: If design is invalid for this backend
        """
        ...
