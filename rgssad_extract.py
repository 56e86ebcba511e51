import os

from rgssad_cipher import decrypt_content
from rgssad_directory import check_bounds, display_name
from rgssad_reader import RgssadFormatError, write_file


def resolve_output_path(output_dir, name):
    """
    计算记录在输出目录中的落盘路径。
    含 NUL 字节、为空或带 '..' 跳出输出目录的文件名视为格式错误。
    """
    if '\x00' in name:
        raise RgssadFormatError(f'非法的文件路径（含 NUL 字节）: {display_name(name)!r}')
    root = os.path.abspath(output_dir)
    path = os.path.normpath(os.path.join(root, *name.split('/')))
    if os.path.commonpath([root, path]) != root or path == root:
        raise RgssadFormatError(f'非法的文件路径: {display_name(name)}')
    return path


def read_record(reader, record):
    """读取并解密一条记录的文件内容。"""
    check_bounds(record, reader.size)
    reader.seek(record.offset)
    data = reader.read_exact(record.size)
    return decrypt_content(data, record.key)


def extract_record(reader, record, output_dir='.'):
    """解密一条记录并写入 output_dir 下对应的路径，返回写入的路径。"""
    path = resolve_output_path(output_dir, record.name)
    write_file(path, read_record(reader, record))
    return path
