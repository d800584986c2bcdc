from __future__ import annotations

from lpnc.unit import TranslationUnit

DEMO = '''PROGRAMA "DEMO":
INICIO
A = 5
B = 3
C = A + B
RES = C * A
FIM
'''

DEMO_ASM = '''.DATA

A = 5
B = 3
C = ?
R = ?

.CODE
.ORG 0
LDA A
ADD B
STA C
LDA C
MUL A
STA R
'''


def program(*statements: str, res: str = 'A') -> str:
    body = '\n'.join(statements)
    return f'PROGRAMA "P":\nINICIO\n{body}\nRES = {res}\nFIM\n'


def parsed(source: str) -> TranslationUnit:
    t = TranslationUnit(source)
    t.dparse()
    return t
