"""
Batch conversion of CFR volumes.

Converts every ``CFR-*.xml`` volume under an input directory and writes one
JSON tree per part, laid out as::

    <output_dir>/regulation/<part>/<year>-annual-<part>

Volumes are independent, so they are decoded in separate worker processes.
"""

import glob
import os
import re
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from tqdm import tqdm

from regtree.exceptions import RegTreeError
from regtree.services.converter import load_document
from regtree.services.emitter import DEFAULT_INDENT, emit_json
from regtree.utils.logging import get_logger

logger = get_logger(__name__)

_VOLUME_NAME_RE = re.compile(r'CFR-(\d+)-title(\d+)-vol(\d+)')


@dataclass
class VolumeResult:
    """Outcome of converting a single volume"""
    path: str
    written: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class ConversionReport:
    files_found: int = 0
    volumes_converted: int = 0
    written: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def extract_volume_info(filename: str) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """Year, title and volume from a name like CFR-2019-title42-vol4.xml."""
    match = _VOLUME_NAME_RE.search(os.path.basename(filename))
    if match:
        return match.group(1), match.group(2), match.group(3)
    return None, None, None


def output_path(output_dir: str, part_number: str, year: str) -> str:
    return os.path.join(output_dir, "regulation", part_number, f"{year}-annual-{part_number}")


class VolumeConverter:
    """Converts a directory of CFR volumes into per-part JSON trees."""

    def __init__(self, input_dir: str, output_dir: str, parts: Optional[Sequence[str]] = None,
                 workers: int = 4, indent: int = DEFAULT_INDENT):
        self.input_dir = input_dir
        self.output_dir = output_dir
        self.parts = list(parts) if parts else None
        self.workers = workers
        self.indent = indent

    def find_xml_files(self) -> List[str]:
        """Find all CFR XML volumes below the input directory."""
        pattern = os.path.join(self.input_dir, "**", "CFR-*.xml")
        return sorted(glob.glob(pattern, recursive=True))

    def _selected_parts(self, document):
        if self.parts is None:
            return [(part.number, part) for part in document.parts()], []
        selected = []
        missing = []
        seen = set()
        for part_id in self.parts:
            part = document.select_part(part_id)
            if part is None:
                missing.append(part_id)
            elif part.number not in seen:
                # Ids such as "433" and "PART 433" can name the same part
                seen.add(part.number)
                selected.append((part.number, part))
        return selected, missing

    def process_xml_file(self, xml_file: str) -> VolumeResult:
        """Convert one volume and write its parts; failures are reported, not raised."""
        result = VolumeResult(path=xml_file)
        year, title_num, volume = extract_volume_info(xml_file)
        if not year:
            result.error = f"Could not extract year/title/volume from {xml_file}"
            logger.warning(result.error)
            return result

        logger.info(f"Processing {xml_file} (Year: {year}, Title: {title_num}, Volume: {volume})")
        try:
            document = load_document(xml_file)
        except RegTreeError as e:
            result.error = str(e)
            logger.error(result.error)
            return result

        selected, result.missing = self._selected_parts(document)
        for number, part in selected:
            path = output_path(self.output_dir, number, year)
            try:
                os.makedirs(os.path.dirname(path), exist_ok=True)
                with open(path, 'w', encoding='utf-8') as f:
                    f.write(emit_json(part, indent=self.indent))
            except OSError as e:
                result.error = f"Could not write part {number} of {xml_file} to {path}: {e}"
                logger.error(result.error)
                return result
            result.written.append(path)
            logger.debug(f"Saved {path}")
        return result

    def convert(self) -> ConversionReport:
        """Convert every volume found and summarize the run."""
        xml_files = self.find_xml_files()
        logger.info(f"Found {len(xml_files)} XML files to process")
        os.makedirs(self.output_dir, exist_ok=True)

        if self.workers > 1:
            with ProcessPoolExecutor(max_workers=self.workers) as executor:
                results = list(tqdm(executor.map(self.process_xml_file, xml_files), total=len(xml_files)))
        else:
            results = [self.process_xml_file(xml_file) for xml_file in tqdm(xml_files)]

        report = ConversionReport(files_found=len(xml_files))
        for result in results:
            # Parts written before a failure are still on disk
            report.written.extend(result.written)
            if result.error:
                report.errors.append(result.error)
                continue
            report.volumes_converted += 1
            report.missing.extend(f"{result.path}: {part_id}" for part_id in result.missing)

        logger.info(f"Conversion complete. {len(report.written)} parts saved to {self.output_dir}")
        return report
