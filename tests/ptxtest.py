"""Sample modules shared by the tests."""

import ptxscan


PREAMBLE = """\
//
// Generated by NVIDIA NVVM Compiler
//
// Compiler Build ID: CL-32267302
// Based on NVVM 7.0.1
//

.version 8.0
.target sm_80
.address_size 64
"""

FOO_DECL = """\
.func  (.param .b64 func_retval0) _foo(
	.param .b64 _foo_param_0,
	.param .b64 _foo_param_1
)
;"""

SCRATCH_DECL = ".global .align 4 .b8 scratch[16];"

KERNEL_BODY = """
	.reg .b32 	%r<3>;
	.reg .b64 	%rd<3>;

	ld.param.u64 	%rd1, [_Z6kernelPiS_i_param_0];
	{
	.reg .b32 temp;
	}
	ret;
"""

KERNEL_DEF = """\
.visible .entry _Z6kernelPiS_i(
	.param .u64 _Z6kernelPiS_i_param_0,
	.param .u32 _Z6kernelPiS_i_param_1
)
{""" + KERNEL_BODY + "}"

EXAMPLE = (
    PREAMBLE
    + "\n// helper declared ahead of use\n"
    + FOO_DECL
    + "\n\n/* scratch space\n   shared by kernels */\n"
    + SCRATCH_DECL
    + "\n\n\t// .globl\t_Z6kernelPiS_i\n"
    + KERNEL_DEF
    + "\n// end of module\n"
)


def module(*declarations):
    """Build module text from the standard preamble and declarations."""
    return PREAMBLE + "\n" + "\n\n".join(declarations) + "\n"


def declarations(source):
    """Parse all declarations of module text into a list."""
    return list(ptxscan.PtxParser(source))
