"""Sample C-- programs bundled with the interpreter"""

COLLATZ = """
val = 104
while (val >= 2) {
    if (val % 2 == 0) {
        next = val / 2
    } else {
\t\tnext = 3 * val + 1
    }
\tprint val, next
\tval = next
}
"""

COUNTDOWN = """
n = 5
while (n > 0) {
    print n
    n = n - 1
}
"""

GCD = """
a = 1071
b = 462
while (b != 0) {
    t = b
    b = a % b
    a = t
}
print a
"""

SAMPLE_PROGRAMS = {
    "collatz": COLLATZ,
    "countdown": COUNTDOWN,
    "gcd": GCD,
}
