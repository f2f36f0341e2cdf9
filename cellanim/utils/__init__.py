# cellanim utilities
from .logging import log, logWarning, logError, logDebug, init_logging, close_logging, print_summary, get_counts
from .binary import (
    ByteOrder,
    read_u8, read_u16, read_u32, read_i16, read_i32, read_f32, read_bool,
    write_u8, write_u16, write_u32, write_i16, write_i32, write_f32, write_bool,
    read_fixed_bytes, write_fixed_bytes, read_padded_string, write_padded_string,
)
from .packed import PackedXY, HighByteFlag, HighHalfSelect
