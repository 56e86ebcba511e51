import os
import struct


class RgssadFormatError(ValueError):
    """档案格式错误：签名不符、版本不支持、记录越界等。"""


class ArchiveReader:
    """
    对档案文件的顺序/定位读取的简单封装。
    读取不足时直接抛出 IOError，不做任何重试。
    """

    def __init__(self, f):
        self.file = f
        self.size = f.seek(0, os.SEEK_END)
        f.seek(0)

    @classmethod
    def open(cls, path):
        f = open(path, 'rb')
        try:
            return cls(f)
        except BaseException:
            f.close()
            raise

    def close(self):
        self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def tell(self):
        return self.file.tell()

    def seek(self, offset):
        self.file.seek(offset)

    def read_exact(self, length):
        pos = self.file.tell()
        data = self.file.read(length)
        if len(data) != length:
            raise IOError(f'读取失败：偏移 0x{pos:08X} 处需要 {length} 字节，实际只有 {len(data)} 字节')
        return data

    def read_uint32(self):
        """读取一个32位无符号整数（小端序）"""
        return struct.unpack('<I', self.read_exact(4))[0]

    def read_uint8(self):
        return self.read_exact(1)[0]


def write_file(path, data):
    """创建缺失的上级目录，然后写入（覆盖）整个文件。"""
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, 'wb') as out_f:
        out_f.write(data)
