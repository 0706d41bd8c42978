"""
Shared XML builders and the JSON comparison used by the golden test.
"""

SAMPLE_VOLUME = """<?xml version="1.0" encoding="UTF-8"?>
<CFRDOC ED="12" REV="1">
  <AMDDATE>Oct. 1, 2019</AMDDATE>
  <FMTR>
    <TITLEPG><TITLENUM>Title 42</TITLENUM></TITLEPG>
  </FMTR>
  <TITLE>
    <CHAPTER>
      <TOC><TOCHD><HD SOURCE="HED">CHAPTER IV</HD></TOCHD></TOC>
      <SUBCHAP>
        <HD SOURCE="HED">SUBCHAPTER C—MEDICAL ASSISTANCE PROGRAMS</HD>
        <PART>
          <EAR>Pt. 431</EAR>
          <HD SOURCE="HED">PART 431—STATE ORGANIZATION AND GENERAL ADMINISTRATION</HD>
          <SECTION>
            <SECTNO>§ 431.1</SECTNO>
            <SUBJECT>Purpose.</SUBJECT>
            <P>This part describes requirements for the State plan.</P>
          </SECTION>
        </PART>
        <PART>
          <EAR>Pt. 433</EAR>
          <HD SOURCE="HED">PART 433—STATE FISCAL ADMINISTRATION</HD>
          <CONTENTS>
            <SECHD>Sec.</SECHD>
            <SECTNO>433.1</SECTNO>
            <SUBJECT>Purpose.</SUBJECT>
          </CONTENTS>
          <AUTH>
            <HD SOURCE="HED">Authority:</HD>
            <P>Sec. 1102 of the Social Security Act (42 U.S.C. 1302).</P>
          </AUTH>
          <SUBPART>
            <HD SOURCE="HED">Subpart A—General Provisions</HD>
            <SECTION>
              <SECTNO>§ 433.10</SECTNO>
              <SUBJECT>Rates of FFP for program services.</SUBJECT>
              <P>(a) <E T="03">Basis.</E> Sections 1903(a)(1) and 1905(b) of the Act provide for payment.</P>
              <P>(b) <E T="03">Amount of FFP.</E> The Federal share is determined as follows:</P>
              <P>(1) For the 50 States;</P>
              <P>(2) For the territories.</P>
              <P>(c) <E T="03">Special provisions.</E> (1) Under section 1905(b) of the Act.</P>
              <CITA>[43 FR 45201, Sept. 29, 1978]</CITA>
            </SECTION>
            <SECTION>
              <SECTNO>§ 433.11</SECTNO>
              <SUBJECT>Enhanced FFP rates for services.</SUBJECT>
              <P>(a)(1) Enhanced FFP is available for services.</P>
              <P>(2) Enhanced FFP is not available for:</P>
              <P>(i) Services provided to inmates;</P>
              <P>(ii) Services reimbursed under other programs, including:</P>
              <P>(A) Items covered by the plan.</P>
              <P>(b) The enhanced rate applies to the State share.</P>
            </SECTION>
          </SUBPART>
          <SUBPART>
            <HD SOURCE="HED">Subpart B—General Administrative Requirements for State Financial Participation</HD>
            <SUBJGRP>
              <HD SOURCE="HED">Sources of State Share</HD>
              <SECTION>
                <SECTNO>§ 433.50</SECTNO>
                <SUBJECT>Basis, scope, and applicability.</SUBJECT>
                <P>(a) <E T="03">Basis.</E> This subpart interprets the Act.</P>
                <P>(1) Section 1902(a)(2) requires State participation.</P>
                <P>(b) <E T="03">Applicability.</E> The provisions apply to all States.</P>
              </SECTION>
            </SUBJGRP>
          </SUBPART>
        </PART>
      </SUBCHAP>
    </CHAPTER>
  </TITLE>
</CFRDOC>
"""


def cfr_volume(part_body: str, header: str = "PART 433—STATE FISCAL ADMINISTRATION") -> str:
    """Wrap the content of a single part in the CFRDOC path."""
    return (
        "<CFRDOC><TITLE><CHAPTER><SUBCHAP>"
        "<HD>SUBCHAPTER C—MEDICAL ASSISTANCE PROGRAMS</HD>"
        f"<PART><HD>{header}</HD>{part_body}</PART>"
        "</SUBCHAP></CHAPTER></TITLE></CFRDOC>"
    )


def section_xml(*paragraphs: str, number: str = "§ 433.12") -> str:
    """A section holding one P element per argument."""
    body = "".join(f"<P>{text}</P>" for text in paragraphs)
    return f"<SECTION><SECTNO>{number}</SECTNO><SUBJECT>Test.</SUBJECT>{body}</SECTION>"


def compare_json(have, expected, path="$"):
    """
    Structural comparison of decoded JSON values.

    Every key of an expected object must be present in the actual object,
    every item of an expected array must match some item of the actual
    array, and scalars must be equal. Returns None on a match, otherwise a
    message naming the first mismatch.
    """
    if isinstance(expected, dict):
        if not isinstance(have, dict):
            return f"{path}: expected an object, got {type(have).__name__}"
        for key, value in expected.items():
            if key not in have:
                return f"{path}: missing key {key!r}"
            error = compare_json(have[key], value, f"{path}.{key}")
            if error:
                return error
        return None
    if isinstance(expected, list):
        if not isinstance(have, list):
            return f"{path}: expected an array, got {type(have).__name__}"
        if len(have) < len(expected):
            return f"{path}: missing array items ({len(have)} < {len(expected)})"
        for index, value in enumerate(expected):
            if all(compare_json(item, value) for item in have):
                return f"{path}[{index}]: no matching item"
        return None
    if have != expected:
        return f"{path}: {have!r} != {expected!r}"
    return None
