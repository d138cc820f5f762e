import io
import sys
from collections import deque

import pytest

from syslabs.armmem import MEM_DATA_START, MEM_TEXT_START, Memory
from syslabs.armshell import (
    ARM_REGS,
    CpuState,
    ProgramLoadError,
    Simulator,
    main,
    process_instruction,
)


def _stepper(current, next_state, memory):
    next_state.pc = current.pc + 4
    return False


def _halting_after(n):
    calls = {"count": 0}

    def processor(current, next_state, memory):
        calls["count"] += 1
        next_state.pc = current.pc + 4
        return calls["count"] >= n

    return processor


@pytest.fixture
def out():
    return io.StringIO()


def test_cpu_state_copy_is_independent():
    state = CpuState(pc=8)
    clone = state.copy()
    clone.regs[0] = 5
    clone.pc = 12
    assert state.regs[0] == 0
    assert state.pc == 8
    assert len(state.regs) == ARM_REGS


def test_default_processor_leaves_next_state_unchanged():
    current = CpuState(pc=MEM_TEXT_START)
    next_state = current.copy()
    assert process_instruction(current, next_state, Memory()) is False
    assert next_state == current


def test_load_program(tmp_path, out):
    program = tmp_path / "prog.x"
    program.write_text("8b010000\nd4400000\n")
    sim = Simulator(out=out)
    assert sim.load_program(program) == 2
    assert sim.memory.read_32(MEM_TEXT_START) == 0x8B010000
    assert sim.memory.read_32(MEM_TEXT_START + 4) == 0xD4400000
    assert sim.current.pc == MEM_TEXT_START
    assert sim.next_state == sim.current
    assert "Read 2 words from program into memory.\n\n" in out.getvalue()


def test_load_missing_program(tmp_path, out):
    with pytest.raises(ProgramLoadError, match="Can't open program file"):
        Simulator(out=out).load_program(tmp_path / "missing.x")


def test_load_malformed_program(tmp_path, out):
    program = tmp_path / "bad.x"
    program.write_text("8b010000\nnothex\n")
    with pytest.raises(ProgramLoadError, match="Malformed program file"):
        Simulator(out=out).load_program(program)


def test_cycle_latches_next_state(out):
    sim = Simulator(processor=_stepper, out=out)
    sim.current.pc = MEM_TEXT_START
    sim.next_state = sim.current.copy()
    sim.cycle()
    assert sim.current.pc == MEM_TEXT_START + 4
    assert sim.instruction_count == 1
    assert sim.current is not sim.next_state


def test_run_counts_cycles(out):
    sim = Simulator(processor=_stepper, out=out)
    sim.run(5)
    assert sim.instruction_count == 5
    assert "Simulating for 5 cycles...\n\n" in out.getvalue()


def test_run_stops_when_halted(out):
    sim = Simulator(processor=_halting_after(2), out=out)
    sim.run(10)
    assert sim.instruction_count == 2
    assert sim.run_bit is False
    assert "Simulator halted\n\n" in out.getvalue()


def test_go_runs_until_halt(out):
    sim = Simulator(processor=_halting_after(3), out=out)
    sim.go()
    assert sim.instruction_count == 3
    assert out.getvalue().startswith("Simulating...\n\n")
    assert out.getvalue().endswith("Simulator halted\n\n")


def test_halted_simulator_refuses_to_run(out):
    sim = Simulator(processor=_stepper, out=out)
    sim.run_bit = False
    sim.go()
    sim.run(3)
    assert sim.instruction_count == 0
    assert out.getvalue().count("Can't simulate, Simulator is halted") == 2


def test_mdump_writes_to_output_and_dump_file(out):
    sim = Simulator(out=out)
    sim.memory.write_32(MEM_DATA_START, 42)
    dump = io.StringIO()
    sim.mdump(dump, MEM_DATA_START, MEM_DATA_START + 4)
    assert out.getvalue() == dump.getvalue()
    assert "  0x10000000 (268435456) : 0x2a\n" in dump.getvalue()
    assert "Memory content [0x10000000..0x10000004] :" in dump.getvalue()


def test_rdump_formats_registers(out):
    sim = Simulator(out=out)
    sim.current.regs[5] = -1
    sim.current.flag_z = 1
    dump = io.StringIO()
    sim.rdump(dump)
    text = dump.getvalue()
    assert text == out.getvalue()
    assert "X5: 0xffffffffffffffff\n" in text
    assert "X31: 0x0\n" in text
    assert "FLAG_Z: 1\n" in text
    assert "Instruction Count : 0\n" in text


def test_help_lists_commands(out):
    Simulator(out=out).help()
    assert "----------------ARM ISIM Help-----------------------" in out.getvalue()
    assert "quit             -  exit the program" in out.getvalue()


def test_input_command_sets_both_states(out):
    sim = Simulator(out=out)
    assert sim.handle_command(deque(["input", "3", "0x10"])) is True
    assert sim.current.regs[3] == 16
    assert sim.next_state.regs[3] == 16


def test_quit_command(out):
    sim = Simulator(out=out)
    assert sim.handle_command(deque(["quit"])) is False
    assert out.getvalue().endswith("Bye.\n")


def test_end_of_input_stops(out):
    assert Simulator(out=out).handle_command(deque()) is False


def test_invalid_command(out):
    sim = Simulator(out=out)
    assert sim.handle_command(deque(["zap"])) is True
    assert "Invalid Command\n" in out.getvalue()


def test_unparsed_argument_stays_in_tokens(out):
    sim = Simulator(out=out)
    tokens = deque(["mdump", "foo"])
    assert sim.handle_command(tokens) is True
    assert list(tokens) == ["foo"]


def test_run_command_and_rdump_command(out):
    sim = Simulator(processor=_stepper, out=out)
    dump = io.StringIO()
    sim.handle_command(deque(["run", "4"]), dump)
    sim.handle_command(deque(["rdump"]), dump)
    assert sim.instruction_count == 4
    assert "Instruction Count : 4\n" in dump.getvalue()


def test_repl_reads_commands_from_stream(out):
    sim = Simulator(out=out)
    dump = io.StringIO()
    sim.repl(io.StringIO("input 1 ff\nrdump\nquit\n"), dump)
    assert sim.current.regs[1] == 255
    assert "X1: 0xff\n" in dump.getvalue()
    assert out.getvalue().count("ARM-SIM> ") == 3


def test_main_without_arguments_fails(capsys):
    assert main([]) == 1
    assert "Error: usage:" in capsys.readouterr().out


def test_main_with_missing_program(tmp_path, capsys):
    assert main([str(tmp_path / "nope.x")]) == 255
    assert "Can't open program file" in capsys.readouterr().out


def test_main_runs_shell(tmp_path, monkeypatch, capsys):
    program = tmp_path / "prog.x"
    program.write_text("8b010000\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "stdin", io.StringIO("rdump\nquit\n"))
    assert main([str(program)]) == 0
    printed = capsys.readouterr().out
    assert printed.startswith("ARM Simulator\n\n")
    assert "Bye." in printed
    assert "Current register/bus values" in (tmp_path / "dumpsim").read_text()