import sys
from pathlib import Path

from .config import CONFIG_NAME, ConvertConfig, apply_replace_rules, load_config, write_template
from .dat import write_forward, write_reverse
from .tables import source_records
from .text import DecodeError, EncodeError, decode, decode_lossy, encode, encode_lossy, unencodable

USAGE = (
    "python -m falcom_sjis d <sjis file/dir> <utf-8 out>\n"
    "python -m falcom_sjis e <utf-8 file/dir> <sjis out>\n"
    "python -m falcom_sjis c <utf-8 file/dir>\n"
    "python -m falcom_sjis t <table out dir>\n"
    "python -m falcom_sjis i"
)


def format_chars(chars: list[str]) -> str:
    return ", ".join(f"{c}(U+{ord(c):04X})" for c in chars)


def iter_jobs(inp: Path, outp: Path | None, pattern: str) -> list[tuple[Path, Path | None]]:
    if inp.is_file():
        return [(inp, outp)]
    if not inp.is_dir():
        raise SystemExit(f"[ERR] not found: {inp}")
    return [
        (src, outp / src.relative_to(inp) if outp is not None else None)
        for src in sorted(inp.rglob(pattern))
        if src.is_file()
    ]


def read_utf8(p: Path) -> str:
    return p.read_bytes().decode("utf-8-sig")


def write_out(p: Path, data: bytes) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data)


def decode_files(inp: Path, outp: Path, cfg: ConvertConfig) -> int:
    jobs = iter_jobs(inp, outp, cfg.pattern)
    for src, dst in jobs:
        data = src.read_bytes()
        if cfg.lossy:
            text = decode_lossy(data)
        else:
            try:
                text = decode(data)
            except DecodeError as e:
                sys.stderr.write(f"[ERR] {src}: {e}\n")
                return 2
        write_out(dst, text.encode("utf-8"))
    sys.stderr.write(f"[OK] decoded {len(jobs)} files\n")
    return 0


def encode_files(inp: Path, outp: Path, cfg: ConvertConfig) -> int:
    jobs = iter_jobs(inp, outp, cfg.pattern)
    for src, dst in jobs:
        text = apply_replace_rules(read_utf8(src), cfg.replace)
        if cfg.lossy:
            data = encode_lossy(text)
        else:
            try:
                data = encode(text)
            except EncodeError as e:
                sys.stderr.write(f"[ERR] {src}: {e}\n")
                sys.stderr.write(format_chars(unencodable(text)) + "\n")
                return 2
        write_out(dst, data)
    sys.stderr.write(f"[OK] encoded {len(jobs)} files\n")
    return 0


def check_files(inp: Path, cfg: ConvertConfig) -> int:
    bad_files = 0
    for src, _ in iter_jobs(inp, None, cfg.pattern):
        bad = unencodable(apply_replace_rules(read_utf8(src), cfg.replace))
        if bad:
            bad_files += 1
            print(f"{src}: {format_chars(bad)}")
    if bad_files:
        sys.stderr.write(f"[ERR] {bad_files} files have unencodable characters\n")
        return 1
    sys.stderr.write("[OK] everything is encodable\n")
    return 0


def dump_tables(out_dir: Path) -> int:
    forward, reverse = source_records()
    write_out(out_dir / "utf8sjis.dat", write_forward(forward))
    write_out(out_dir / "sjisutf8.dat", write_reverse(reverse))
    sys.stderr.write(f"[OK] {len(forward)} forward records, {len(reverse)} reverse cells -> {out_dir}\n")
    return 0


def main(argv: list[str]) -> int:
    if len(argv) < 2:
        raise SystemExit(USAGE)

    cmd = argv[1]
    ini_path = Path.cwd() / CONFIG_NAME

    if cmd == "i":
        if ini_path.exists():
            sys.stderr.write(f"[ERR] already exists: {ini_path}\n")
            return 2
        write_template(ini_path)
        sys.stderr.write(f"[OK] wrote {ini_path}\n")
        return 0

    if cmd == "t":
        if len(argv) != 3:
            raise SystemExit("python -m falcom_sjis t <table out dir>")
        return dump_tables(Path(argv[2]))

    try:
        cfg = load_config(ini_path)
    except (ValueError, UnicodeDecodeError) as e:
        sys.stderr.write(f"[ERR] {CONFIG_NAME}: {e}\n")
        return 2

    if cmd in ("d", "e"):
        if len(argv) != 4:
            raise SystemExit(USAGE)
        inp, outp = Path(argv[2]), Path(argv[3])
        return decode_files(inp, outp, cfg) if cmd == "d" else encode_files(inp, outp, cfg)

    if cmd == "c":
        if len(argv) != 3:
            raise SystemExit("python -m falcom_sjis c <utf-8 file/dir>")
        return check_files(Path(argv[2]), cfg)

    raise SystemExit(cmd)


def run() -> None:
    raise SystemExit(main(sys.argv))
