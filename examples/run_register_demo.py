import argparse
import logging
import sys
from pathlib import Path

# Ensure local repo package is used even if another "ahbsim" is on PYTHONPATH.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ahbsim import BurstType, BusRequest, CsrPeripheral, SimulationEngine, TransferType
from ahbsim.core.burst import burst_addresses


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Drive a few bus transfers into the CSR block.")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to an alternative register map config.yaml",
    )
    parser.add_argument(
        "--value",
        type=lambda text: int(text, 0),
        default=0xDEADBEEF,
        help="Word written to CTRL before reading it back",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log controller transitions",
    )
    return parser.parse_args()


def word_request(addr: int, write: bool, burst: BurstType = BurstType.SINGLE, seq: bool = False):
    return BusRequest(
        sel=True,
        trans=TransferType.SEQ if seq else TransferType.NONSEQ,
        addr=addr,
        burst=burst,
        write=write,
        strobe=0xF,
    )


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    csr = CsrPeripheral(config_path=args.config)
    engine = SimulationEngine()
    ctrl = csr.address_of("CTRL")
    status = csr.address_of("STATUS")

    requests = [
        word_request(ctrl, write=True),
        BusRequest.idle(wdata=args.value),
        word_request(ctrl, write=False),
        BusRequest.idle(),
        word_request(status, write=True),
        BusRequest.idle(wdata=0),
        BusRequest.idle(),
    ]
    beats = burst_addresses(ctrl, 2, BurstType.WRAP4)
    requests.append(word_request(beats[0], write=False, burst=BurstType.WRAP4))
    for addr in beats[1:]:
        requests.append(word_request(addr, write=False, burst=BurstType.WRAP4, seq=True))
    requests.append(BusRequest.idle())

    for record in engine.run(csr, requests):
        req = record.request
        phase = f"{req.trans.name:<6} 0x{req.addr:08X}" if req.is_valid_address_phase else "-" * 17
        print(
            f"{record.cycle:3d} {record.state:<10} {phase} "
            f"ready={int(record.response.ready)} {record.response.resp.name:<5} "
            f"rdata=0x{record.response.rdata:08X}"
        )


if __name__ == "__main__":
    main()
