# chunkpic

`chunkpic` provides infrastructure pieces for a particle-in-cell (PIC)
simulation whose domain is split into many small *chunks* spread across
processes.

## What is in the package

- **Load balancing** – `chunkpic.balancer.Balancer` holds the load of every
  chunk and assigns a contiguous range of chunks to each process. The initial
  assignment uses a binary search on the cumulative load; if that does not
  give a strictly ascending boundary, it starts from a uniform split and
  refines it with the iterative scheme of SMILEI (`assign_smilei`).
- **Particle kernels** – `chunkpic.esirkepov` implements charge-conserving
  current deposition (Esirkepov 2001) in 1D, 2D and 3D (`deposit1d`,
  `deposit2d`, `deposit3d`, `shift_weights`); `chunkpic.interp` interpolates a
  4D field array to particle positions (`interp1d`, `interp2d`, `interp3d`,
  `shift_weights`). Both work on numpy arrays, in place where they modify
  their arguments, and the interpolation accepts per-lane index and weight
  arrays.
- **Exchange buffers** – `chunkpic.buffer.Buffer` is a resizable byte buffer;
  `chunkpic.mpibuffer.MpiBuffer` keeps send/receive buffers together with
  per-direction (3×3×3) sizes, offsets and handle slots, and serialises its
  flags and tables with `pack()` / `unpack()`.
- **Chunk lists** – `chunkpic.chunkvector.ChunkVector` is a list of chunks
  that drops empty slots, sorts by `id`, fills in the id and rank of all 27
  neighbours from a chunk map (`set_neighbors`) and checks them (`validate`).
  Chunks and chunk maps are duck-typed: any objects with the methods named in
  the module docstring will do.
- **Run support** – `chunkpic.cfgparser.CfgParser` reads and validates a JSON
  (comments allowed) or TOML configuration with `application`, `diagnostic`
  and `parameter` sections, raising `ConfigError` with every problem found;
  `chunkpic.argparser` parses the run options (`-c/--config`, `-l/--load`,
  `-s/--save`, `-t/--tmax`, `-e/--emax`, `-v/--verbose`) into a frozen
  `Arguments` dataclass; `chunkpic.debug` sets up the `chunkpic` logger with
  a compact `LABEL [function@line] message` format on standard error.
- **Helpers** – `chunkpic.utils` has `format_step`, `wall_clock`,
  `get_endian_flag`, `get_max_threads`, `sync_directory` and the
  `SendRecvMode` and `ArrayLayout` enums.

## Installation

Install the package together with its one dependency, `numpy`, with your
usual Python package installer. Python 3.11 or newer is required.

## Examples

### Distributing chunks over processes

```python
from chunkpic.balancer import Balancer

balancer = Balancer(16)          # 16 chunks
balancer.fill_load(1.0)          # uniform workload
boundary = balancer.assign_initial(4)
print(boundary)                  # [0, 4, 8, 12, 16]

print(balancer.is_boundary_ascending(boundary))  # True
```

Process `r` owns the chunks `boundary[r]` up to (but not including)
`boundary[r + 1]`. After the chunk loads have changed, `assign(boundary)`
returns a boundary moved towards a better balance, and
`print_assignment(out, boundary)` writes a per-process summary to a text
stream.

### Interpolating a field

```python
import numpy as np
from chunkpic.interp import interp3d

eb = np.ones((4, 4, 4, 6))       # [iz, iy, ix, component]
w = np.array([0.5, 0.5])         # first-order weights
interp3d(eb, 0, 0, 0, 0, w, w, w, 1.0)   # 1.0
```

### Reading a configuration and the run options

```python
from chunkpic.argparser import parse_args
from chunkpic.cfgparser import CfgParser

args = parse_args(["-c", "config.toml"])
cfg = CfgParser()
cfg.parse_file(args.config)      # raises ConfigError if invalid
print(cfg.nx, cfg.cx, cfg.delt)
```

### Step formatting

```python
from chunkpic.utils import format_step

format_step(42)   # "00000042"
```

## What the package does not do

The package is a set of building blocks, not a simulation program. It has no
command to run, no main loop, and no concrete chunk class: `ChunkVector`
works with chunk objects you supply. It does not move data between
processes itself — `MpiBuffer` only holds buffers and bookkeeping, with no
halo packing of field arrays and no message passing. There is no step log
writer and no redirection of per-process standard output or error to files.

## Running the tests

The test suite uses pytest, which is listed in the `test` extra.