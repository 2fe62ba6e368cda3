"""Stand-alone exhaustive test for Turing machine addition."""

import test_utils as tu

TOTAL_BITS = 4


def _test_add(n=TOTAL_BITS):
    """Add every pair of unsigned ``n``-bit operands."""
    rows = []
    for a in tu.range_unsigned(n):
        for b in tu.range_unsigned(n):
            a_bin = tu.to_binary_unsigned(a)
            b_bin = tu.to_binary_unsigned(b)
            res_bin, steps, halted = tu.run_machine(a_bin, b_bin)
            exp = a + b
            exp_bin = tu.to_binary_unsigned(exp)
            res = int(res_bin, 2) if halted else None
            ok = halted and res_bin == exp_bin
            rows.append(("add", a, a_bin, b, b_bin, exp, exp_bin, res, res_bin, steps, ok))
    return rows


def test_add_exhaustive():
    rows = _test_add(3)
    failed = [r for r in rows if not r[-1]]
    assert not failed
    assert len(rows) == 64


def main():
    """Run the addition test and print the result table."""
    rows = _test_add()
    tu.print_table(rows, csv_path="test_log/test_add.csv")


if __name__ == "__main__":
    main()
