"""DWARF v1 constants and enums."""

from enum import IntEnum


class Tag(IntEnum):
    """DWARF v1 entry tags."""

    PADDING = 0x0000
    ARRAY_TYPE = 0x0001
    CLASS_TYPE = 0x0002
    ENTRY_POINT = 0x0003
    ENUMERATION_TYPE = 0x0004
    FORMAL_PARAMETER = 0x0005
    GLOBAL_SUBROUTINE = 0x0006
    GLOBAL_VARIABLE = 0x0007
    LABEL = 0x000A
    LEXICAL_BLOCK = 0x000B
    LOCAL_VARIABLE = 0x000C
    MEMBER = 0x000D
    POINTER_TYPE = 0x000F
    REFERENCE_TYPE = 0x0010
    COMPILE_UNIT = 0x0011
    STRING_TYPE = 0x0012
    STRUCTURE_TYPE = 0x0013
    SUBROUTINE = 0x0014
    SUBROUTINE_TYPE = 0x0015
    TYPEDEF = 0x0016
    UNION_TYPE = 0x0017
    UNSPECIFIED_PARAMETERS = 0x0018
    VARIANT = 0x0019
    COMMON_BLOCK = 0x001A
    COMMON_INCLUSION = 0x001B
    INHERITANCE = 0x001C
    INLINED_SUBROUTINE = 0x001D
    MODULE = 0x001E
    PTR_TO_MEMBER_TYPE = 0x001F
    SET_TYPE = 0x0020
    SUBRANGE_TYPE = 0x0021
    WITH_STMT = 0x0022

    @classmethod
    def decode(cls, value: int) -> "Tag | int":
        """Map a raw tag to the enum, keeping vendor tags as plain ints."""
        try:
            return cls(value)
        except ValueError:
            return value


class AttributeForm(IntEnum):
    """Encoding of an attribute value (low 4 bits of the attribute name)."""

    ADDR = 0x1
    REF = 0x2
    BLOCK2 = 0x3
    BLOCK4 = 0x4
    DATA2 = 0x5
    DATA4 = 0x6
    DATA8 = 0x7
    STRING = 0x8


class AttributeName(IntEnum):
    """DWARF v1 attribute names, form bits included."""

    SIBLING = 0x0012
    LOCATION = 0x0023
    NAME = 0x0038
    FUND_TYPE = 0x0055
    MOD_FUND_TYPE = 0x0063
    USER_DEF_TYPE = 0x0072
    MOD_U_D_TYPE = 0x0083
    ORDERING = 0x0095
    SUBSCR_DATA = 0x00A3
    BYTE_SIZE = 0x00B6
    BIT_OFFSET = 0x00C5
    BIT_SIZE = 0x00D6
    ELEMENT_LIST = 0x00F4
    STMT_LIST = 0x0106
    LOW_PC = 0x0111
    HIGH_PC = 0x0121
    LANGUAGE = 0x0136
    MEMBER = 0x0142
    DISCR = 0x0152
    DISCR_VALUE = 0x0163
    STRING_LENGTH = 0x0193
    COMMON_REFERENCE = 0x01A2
    COMP_DIR = 0x01B8
    CONTAINING_TYPE = 0x01D2
    PRODUCER = 0x0258
    PROTOTYPED = 0x0278
    ABSTRACT_ORIGIN = 0x02B2

    @property
    def form(self) -> AttributeForm:
        return AttributeForm(self.value & 0xF)

    @classmethod
    def decode(cls, value: int) -> "AttributeName | int":
        """Map a raw attribute name to the enum, keeping unknown names as ints."""
        try:
            return cls(value)
        except ValueError:
            return value


class FundamentalType(IntEnum):
    """Fundamental (built-in) types referenced by AT_fund_type."""

    CHAR = 0x0001
    SIGNED_CHAR = 0x0002
    UNSIGNED_CHAR = 0x0003
    SHORT = 0x0004
    SIGNED_SHORT = 0x0005
    UNSIGNED_SHORT = 0x0006
    INTEGER = 0x0007
    SIGNED_INTEGER = 0x0008
    UNSIGNED_INTEGER = 0x0009
    LONG = 0x000A
    SIGNED_LONG = 0x000B
    UNSIGNED_LONG = 0x000C
    POINTER = 0x000D
    FLOAT = 0x000E
    DBL_PREC_FLOAT = 0x000F
    EXT_PREC_FLOAT = 0x0010
    COMPLEX = 0x0011
    DBL_PREC_COMPLEX = 0x0012
    VOID = 0x0014
    BOOLEAN = 0x0015
    EXT_PREC_COMPLEX = 0x0016
    LABEL = 0x0017
    # GNU extensions
    LONG_LONG = 0x8008
    SIGNED_LONG_LONG = 0x8108
    UNSIGNED_LONG_LONG = 0x8208


class TypeModifier(IntEnum):
    """Modifiers found in AT_mod_fund_type / AT_mod_u_d_type blocks."""

    POINTER_TO = 0x01
    REFERENCE_TO = 0x02
    CONST = 0x03
    VOLATILE = 0x04


class LocationAtom(IntEnum):
    """Location expression operations."""

    REG = 0x01
    BASEREG = 0x02
    ADDR = 0x03
    CONST = 0x04
    DEREF2 = 0x05
    DEREF4 = 0x06
    ADD = 0x07


class SubscriptFormat(IntEnum):
    """Formats of an AT_subscr_data item (FT = fundamental index type, UT = user index type)."""

    FT_C_C = 0x0
    FT_C_X = 0x1
    FT_X_C = 0x2
    FT_X_X = 0x3
    UT_C_C = 0x4
    UT_C_X = 0x5
    UT_X_C = 0x6
    UT_X_X = 0x7
    ET = 0x8
