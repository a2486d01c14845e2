"""
Keywords for common standard tags.

This is a small read-only lookup used to label tree nodes. Tags missing from
the table simply show without a keyword; input files may also carry their
own names, which take precedence.
"""

from __future__ import annotations

from types import MappingProxyType

from tagview.records import TagKey


_KEYWORDS: dict[tuple[int, int], str] = {
    (0x0002, 0x0000): "FileMetaInformationGroupLength",
    (0x0002, 0x0001): "FileMetaInformationVersion",
    (0x0002, 0x0002): "MediaStorageSOPClassUID",
    (0x0002, 0x0003): "MediaStorageSOPInstanceUID",
    (0x0002, 0x0010): "TransferSyntaxUID",
    (0x0002, 0x0012): "ImplementationClassUID",
    (0x0002, 0x0013): "ImplementationVersionName",
    (0x0008, 0x0005): "SpecificCharacterSet",
    (0x0008, 0x0008): "ImageType",
    (0x0008, 0x0012): "InstanceCreationDate",
    (0x0008, 0x0013): "InstanceCreationTime",
    (0x0008, 0x0016): "SOPClassUID",
    (0x0008, 0x0018): "SOPInstanceUID",
    (0x0008, 0x0020): "StudyDate",
    (0x0008, 0x0021): "SeriesDate",
    (0x0008, 0x0022): "AcquisitionDate",
    (0x0008, 0x0023): "ContentDate",
    (0x0008, 0x0030): "StudyTime",
    (0x0008, 0x0031): "SeriesTime",
    (0x0008, 0x0032): "AcquisitionTime",
    (0x0008, 0x0033): "ContentTime",
    (0x0008, 0x0050): "AccessionNumber",
    (0x0008, 0x0060): "Modality",
    (0x0008, 0x0070): "Manufacturer",
    (0x0008, 0x0080): "InstitutionName",
    (0x0008, 0x0090): "ReferringPhysicianName",
    (0x0008, 0x1030): "StudyDescription",
    (0x0008, 0x103E): "SeriesDescription",
    (0x0008, 0x1090): "ManufacturerModelName",
    (0x0008, 0x1115): "ReferencedSeriesSequence",
    (0x0008, 0x1140): "ReferencedImageSequence",
    (0x0010, 0x0010): "PatientName",
    (0x0010, 0x0020): "PatientID",
    (0x0010, 0x0030): "PatientBirthDate",
    (0x0010, 0x0040): "PatientSex",
    (0x0010, 0x1010): "PatientAge",
    (0x0010, 0x1030): "PatientWeight",
    (0x0018, 0x0015): "BodyPartExamined",
    (0x0018, 0x0050): "SliceThickness",
    (0x0018, 0x0060): "KVP",
    (0x0018, 0x0088): "SpacingBetweenSlices",
    (0x0018, 0x1020): "SoftwareVersions",
    (0x0018, 0x5100): "PatientPosition",
    (0x0020, 0x000D): "StudyInstanceUID",
    (0x0020, 0x000E): "SeriesInstanceUID",
    (0x0020, 0x0010): "StudyID",
    (0x0020, 0x0011): "SeriesNumber",
    (0x0020, 0x0012): "AcquisitionNumber",
    (0x0020, 0x0013): "InstanceNumber",
    (0x0020, 0x0032): "ImagePositionPatient",
    (0x0020, 0x0037): "ImageOrientationPatient",
    (0x0020, 0x0052): "FrameOfReferenceUID",
    (0x0020, 0x1041): "SliceLocation",
    (0x0028, 0x0002): "SamplesPerPixel",
    (0x0028, 0x0004): "PhotometricInterpretation",
    (0x0028, 0x0008): "NumberOfFrames",
    (0x0028, 0x0010): "Rows",
    (0x0028, 0x0011): "Columns",
    (0x0028, 0x0030): "PixelSpacing",
    (0x0028, 0x0100): "BitsAllocated",
    (0x0028, 0x0101): "BitsStored",
    (0x0028, 0x0102): "HighBit",
    (0x0028, 0x0103): "PixelRepresentation",
    (0x0028, 0x1050): "WindowCenter",
    (0x0028, 0x1051): "WindowWidth",
    (0x0028, 0x1052): "RescaleIntercept",
    (0x0028, 0x1053): "RescaleSlope",
    (0x7FE0, 0x0010): "PixelData",
}

KEYWORDS = MappingProxyType(_KEYWORDS)


def keyword_for(key: TagKey) -> str:
    """Return the keyword for a tag, or an empty string when unknown.

    Group length tags (element 0000) of any group are named generically.
    """
    name = KEYWORDS.get((key.group, key.element))
    if name is not None:
        return name
    if key.element == 0x0000:
        return "GroupLength"
    if key.group % 2 == 1:
        return "PrivateTag"
    return ""
