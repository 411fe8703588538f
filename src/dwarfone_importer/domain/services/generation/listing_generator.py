#!/usr/bin/env python3

"""Render the imported function table as C-style prototypes."""

from ....infrastructure.logging import get_logger
from ...models.program import Function, Program

logger = get_logger(__name__)


class ListingGenerator:
    """Produces one prototype line per function, ordered by entry point."""

    def generate(self, program: Program) -> str:
        lines = [f"// Functions imported from {program.name}", ""]
        count = 0
        for function in program.function_manager.iter_functions():
            lines.append(self.format_function(function))
            count += 1

        logger.debug(f"Rendered {count} functions")
        return "\n".join(lines) + "\n"

    def format_function(self, function: Function) -> str:
        return_type = (
            function.return_parameter.data_type.display_name()
            if function.return_parameter is not None
            else "undefined"
        )
        params = ", ".join(
            f"{param.data_type.display_name()} {param.name}" for param in function.parameters
        )
        low = function.body.min_address
        high = function.body.max_address
        location = (
            f"0x{low:08x}-0x{high:08x}" if low is not None and high is not None
            else f"0x{function.entry_point:08x}"
        )
        return f"/* {location} */ {return_type} {function.name}({params or 'void'});"
