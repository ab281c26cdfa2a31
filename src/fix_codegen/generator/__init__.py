from fix_codegen.generator.field_generator import InvalidTagError, generate_field_def
from fix_codegen.generator.file_generator import assemble, generate_fields
from fix_codegen.generator.message_generator import generate_message
from fix_codegen.generator.notice import generated_code_notice

__all__ = [
    "InvalidTagError",
    "assemble",
    "generate_field_def",
    "generate_fields",
    "generate_message",
    "generated_code_notice",
]
