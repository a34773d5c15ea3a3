from lead_relay.intake.multipart import (
    boundary_from_content_type,
    infer_boundary,
    parse_multipart,
)


class TestBoundaryFromContentType:
    def test_bare_boundary(self) -> None:
        assert boundary_from_content_type("multipart/form-data; boundary=----X1") == "----X1"

    def test_quoted_boundary(self) -> None:
        assert boundary_from_content_type('multipart/form-data; boundary="abc def"') == "abc def"

    def test_stops_at_next_parameter(self) -> None:
        ct = "multipart/form-data; boundary=xyz; charset=utf-8"
        assert boundary_from_content_type(ct) == "xyz"

    def test_missing_boundary(self) -> None:
        assert boundary_from_content_type("multipart/form-data") is None


class TestInferBoundary:
    def test_reads_first_delimiter_line(self) -> None:
        assert infer_boundary("--abc\r\nContent-Disposition: form-data\r\n") == "abc"

    def test_skips_leading_newlines(self) -> None:
        assert infer_boundary("\r\n--abc\nrest") == "abc"

    def test_non_multipart_text(self) -> None:
        assert infer_boundary("a=1&b=2") is None


class TestParseMultipart:
    def test_crlf_body(self) -> None:
        body = (
            "--B\r\n"
            'Content-Disposition: form-data; name="formID"\r\n'
            "\r\n"
            "241234567890\r\n"
            "--B\r\n"
            'Content-Disposition: form-data; name="pretty"\r\n'
            "\r\n"
            "Name:Jane Doe\r\n"
            "--B--\r\n"
        )
        fields = parse_multipart(body, "multipart/form-data; boundary=B")
        assert fields == {"formID": "241234567890", "pretty": "Name:Jane Doe"}

    def test_bare_lf_body_with_inferred_boundary(self) -> None:
        body = '--B\nContent-Disposition: form-data; name="a"\n\n1\n--B--\n'
        assert parse_multipart(body, "multipart/form-data") == {"a": "1"}

    def test_extra_part_headers(self) -> None:
        body = (
            "--B\r\n"
            'Content-Disposition: form-data; name="note"\r\n'
            "Content-Type: text/plain; charset=utf-8\r\n"
            "\r\n"
            "hello\r\n"
            "--B--\r\n"
        )
        assert parse_multipart(body, "multipart/form-data; boundary=B") == {"note": "hello"}

    def test_filename_does_not_shadow_name(self) -> None:
        body = (
            "--B\r\n"
            'Content-Disposition: form-data; name="upload"; filename="cv.txt"\r\n'
            "\r\n"
            "contents\r\n"
            "--B--\r\n"
        )
        assert parse_multipart(body, "multipart/form-data; boundary=B") == {"upload": "contents"}

    def test_part_without_name_is_skipped(self) -> None:
        body = (
            "--B\r\n"
            "Content-Disposition: form-data\r\n"
            "\r\n"
            "orphan\r\n"
            "--B\r\n"
            'Content-Disposition: form-data; name="kept"\r\n'
            "\r\n"
            "yes\r\n"
            "--B--\r\n"
        )
        assert parse_multipart(body, "multipart/form-data; boundary=B") == {"kept": "yes"}

    def test_multiline_value_is_preserved(self) -> None:
        body = (
            "--B\r\n"
            'Content-Disposition: form-data; name="text"\r\n'
            "\r\n"
            "line one\r\nline two\r\n"
            "--B--\r\n"
        )
        fields = parse_multipart(body, "multipart/form-data; boundary=B")
        assert fields["text"] == "line one\r\nline two"

    def test_no_boundary_anywhere(self) -> None:
        assert parse_multipart("just text", "multipart/form-data") == {}
