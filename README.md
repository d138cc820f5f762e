# syslabs

A small collection of systems tools in pure Python:

- a reader for Unix Version 6 disk images (superblock, inodes, directories,
  path lookup and SHA-1 checksums of files);
- an interactive shell for an instruction-level ARM simulator;
- a typed string-processing list that concatenates strings by type;
- helpers that describe the C integer and floating-point types of a 64-bit
  ARM target.

## Installation

```
pip install .
```

Install the test extra to run the test suite:

```
pip install ".[test]"
pytest
```

## Reading a Unix V6 disk image

```
diskimageaccess [-q] [-i] [-p] path/to/disk.img
```

- `-q` leaves out the disk size and superblock summary
- `-i` prints the checksum of every allocated inode
- `-p` walks the directory tree from `/` and prints the checksum of every path

The image is opened read-only. The command exits with status 1 if the image
cannot be opened or does not hold a valid file system.

From Python:

```python
from syslabs.unixfs import UnixFileSystem
from syslabs.pathname import lookup_path
from syslabs.file import read_file
from syslabs.chksumfile import checksum_by_pathname, checksum_to_hex

with UnixFileSystem.open("disk.img") as fs:
    inumber = lookup_path(fs, "/bin/sh")
    data = read_file(fs, inumber)
    print(checksum_to_hex(checksum_by_pathname(fs, "/bin/sh")))
```

Other building blocks are `syslabs.diskimg.DiskImage` (sector reads and
writes), `syslabs.layout` (`Superblock`, `Inode`, `DirEntry`),
`syslabs.inode.read_inode` and `index_lookup`, `syslabs.file.get_block`,
`syslabs.directory.find_name` and `lookup`, and
`syslabs.diskimageaccess.get_dir_entries` and `print_directory`.

Failures such as a missing path, an unallocated inode or an unreadable sector
raise `FileSystemError` or `DiskImageError`.

## ARM simulator shell

```
arm-sim program.x [more.x ...]
```

Each program file holds whitespace-separated hexadecimal 32-bit words, written
from the start of the text segment (each file is loaded there in turn). At the
`ARM-SIM>` prompt the commands are `go`, `run n`, `mdump low high`, `rdump`,
`input reg_no reg_value`, `?` and `quit`. Memory and register dumps are also
written to a file named `dumpsim` in the current directory.

### What the simulator does not do

The package does not decode or execute any ARM instructions. The default
step, `syslabs.armshell.process_instruction`, leaves the machine state
unchanged and never halts, so `run n` only counts instructions and `go` does
not return. To simulate a real program, build a `Simulator` with a processor
of your own: a callable taking `(current, next_state, memory)` that updates
`next_state` and returns `True` to halt.

```python
from syslabs.armshell import Simulator

def step(current, next_state, memory):
    next_state.pc = current.pc + 4
    return memory.read_32(current.pc) == 0

sim = Simulator(processor=step)
sim.load_program("program.x")
sim.go()
sim.rdump(None)
```

## String-processing list

```python
from syslabs.strproc import StringProcList

items = StringProcList()
items.add_node(0, "hola")
items.add_node(1, "skip")
items.add_node(0, "todos!")
items.concat(0, "hash")   # "hashholatodos!"
```

```
strproc-report [output_file]
```

writes the reference report, by default to `salida.caso.propio.ej1.txt`,
replacing any earlier one. Node types are drawn from
`syslabs.strproc_report.GlibcRandom`, a reproduction of the C library's
`rand()`, seeded with 0.

## C type helpers

```python
from syslabs.climits import int_type, LIMITS
from syslabs.cfloat import float_format

int_type("int16_t").max()           # 32767
int_type("unsigned char").wrap(-1)  # 255
LIMITS["INT_MAX"]                   # 2147483647
float_format("double").digits()     # 15
float_format("double").epsilon()    # Fraction(1, 4503599627370496)
```

Values from `syslabs.cfloat` are exact `fractions.Fraction` objects.